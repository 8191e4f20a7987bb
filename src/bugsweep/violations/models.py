"""
Violation models.

A Violation is one finding parsed from a tool report, tagged with the
variant and task it came from. ToolViolations is the per-tool tally the
evaluation step reads.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from bugsweep.shared.domain.base_model import BaseDomainModel

# SpotBugs priorities: 1 = high, 2 = normal, 3 = low, 5 = experimental.
ERROR_PRIORITY = 1


@dataclass
class Violation(BaseDomainModel):
    """Single finding from an analysis report."""

    tool: str
    bug_type: str
    priority: int
    category: str = ""
    rank: Optional[int] = None
    class_name: str = ""
    source_path: Optional[str] = None
    start_line: Optional[int] = None
    message: str = ""

    # Attribution, filled in by the collection task
    variant: str = ""
    task: str = ""

    @property
    def is_error(self) -> bool:
        return self.priority == ERROR_PRIORITY


@dataclass
class ToolViolations(BaseDomainModel):
    """Error/warning totals and the reports they came from, for one tool."""

    tool_name: str
    errors: int = 0
    warnings: int = 0
    reports: List[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.errors + self.warnings
