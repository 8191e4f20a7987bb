"""
Source filter.

Include/exclude patterns applied to the sources an analysis task declares.
Patterns are Ant-style and matched against the path relative to its
source root.
"""

from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from bugsweep.analysis.patterns import matches_any


class SourceFilter:
    """
    Predicate over source files.

    A file is kept when it matches any include pattern (or no includes
    are configured) and matches no exclude pattern.
    """

    def __init__(self, includes: Iterable[str] = (), excludes: Iterable[str] = ()):
        self.includes: Tuple[str, ...] = tuple(includes)
        self.excludes: Tuple[str, ...] = tuple(excludes)

    def accepts(self, relative_path: str) -> bool:
        if self.includes and not matches_any(relative_path, self.includes):
            return False
        return not matches_any(relative_path, self.excludes)

    def apply(self, source_dirs: Sequence[Path]) -> List[Path]:
        """
        Walk existing ``source_dirs`` and return accepted files.

        Order is deterministic; a file reachable from overlapping roots is
        listed once.
        """
        files: List[Path] = []
        seen = set()
        for source_dir in source_dirs:
            if not source_dir.is_dir():
                continue
            for candidate in sorted(source_dir.rglob("*")):
                if candidate in seen or not candidate.is_file():
                    continue
                if self.accepts(candidate.relative_to(source_dir).as_posix()):
                    seen.add(candidate)
                    files.append(candidate)
        return files

    def __repr__(self) -> str:
        return f"SourceFilter(includes={list(self.includes)}, excludes={list(self.excludes)})"
