"""
Violation sink.

Append-only aggregate shared by every tool configurator of a build.
Collection tasks may append from worker threads at the same time, so
every mutation happens under one lock; readers get copies.
"""

import copy
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bugsweep.shared.infrastructure.logging import get_logger
from bugsweep.violations.models import ToolViolations, Violation

logger = get_logger(__name__)


class ViolationSink:
    """Thread-safe accumulator of parsed violations."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[Violation] = []
        self._tools: Dict[str, ToolViolations] = {}

    def add_violations(
        self,
        tool_name: str,
        violations: Iterable[Violation],
        report: Optional[Path] = None,
    ) -> ToolViolations:
        """
        Append violations and update the tool tally atomically.

        Args:
            tool_name: Tool the violations belong to
            violations: Parsed, attributed violations (may be empty)
            report: Report a reader should open for details

        Returns:
            Snapshot of the tool tally after the append
        """
        batch = list(violations)
        errors = sum(1 for v in batch if v.is_error)

        with self._lock:
            self._records.extend(batch)
            tally = self._tools.setdefault(tool_name, ToolViolations(tool_name=tool_name))
            tally.errors += errors
            tally.warnings += len(batch) - errors
            if report is not None:
                tally.reports.append(Path(report))
            snapshot = copy.deepcopy(tally)

        logger.debug("violations_appended", tool=tool_name, count=len(batch), errors=errors)
        return snapshot

    @property
    def records(self) -> Tuple[Violation, ...]:
        with self._lock:
            return tuple(self._records)

    def for_tool(self, tool_name: str) -> ToolViolations:
        with self._lock:
            tally = self._tools.get(tool_name)
            return copy.deepcopy(tally) if tally else ToolViolations(tool_name=tool_name)

    def summaries(self) -> List[ToolViolations]:
        with self._lock:
            return [copy.deepcopy(t) for t in self._tools.values()]

    @property
    def total_errors(self) -> int:
        return sum(t.errors for t in self.summaries())

    @property
    def total_warnings(self) -> int:
        return sum(t.warnings for t in self.summaries())

    def to_json(self) -> Dict[str, Any]:
        """camelCase export of tallies and records."""
        return {
            "tools": [t.to_json() for t in self.summaries()],
            "violations": [v.to_json() for v in self.records],
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
