"""
Artifact selection.

An ArtifactSet is a lazy view over compiled-output directories narrowed
by include patterns. Nothing touches the filesystem until ``files()`` is
called, which happens inside the analysis task, after compilation.
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple

from bugsweep.analysis.patterns import matches_any


class ArtifactSet:
    """Filtered, deterministic view of compiled artifacts."""

    def __init__(self, output_dirs: Iterable[Path], patterns: Iterable[str]):
        self.output_dirs: Tuple[Path, ...] = tuple(Path(d) for d in output_dirs)
        self.patterns: Tuple[str, ...] = tuple(patterns)

    @classmethod
    def empty(cls) -> "ArtifactSet":
        return cls((), ())

    @property
    def is_empty(self) -> bool:
        """True when no pattern can match; such a set never scans a directory."""
        return not self.patterns or not self.output_dirs

    def files(self) -> List[Path]:
        """
        Scan the output directories and return matching files.

        Files are sorted within each directory and directories keep their
        configured order; a path reachable from two directories is listed once.
        """
        if self.is_empty:
            return []

        selected: List[Path] = []
        seen = set()
        for output_dir in self.output_dirs:
            if not output_dir.is_dir():
                continue
            for candidate in sorted(output_dir.rglob("*")):
                if not candidate.is_file():
                    continue
                relative = candidate.relative_to(output_dir).as_posix()
                if candidate not in seen and matches_any(relative, self.patterns):
                    seen.add(candidate)
                    selected.append(candidate)
        return selected

    def __iter__(self) -> Iterator[Path]:
        return iter(self.files())

    def __repr__(self) -> str:
        return f"ArtifactSet(output_dirs={len(self.output_dirs)}, patterns={len(self.patterns)})"


def select_artifacts(output_dirs: Sequence[Path], patterns: Sequence[str]) -> ArtifactSet:
    """
    Narrow ``output_dirs`` to artifacts matching any of ``patterns``.

    An empty pattern list selects nothing rather than everything.
    """
    if not patterns:
        return ArtifactSet.empty()
    return ArtifactSet(output_dirs, patterns)
