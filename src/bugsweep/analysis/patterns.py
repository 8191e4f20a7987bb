"""
Include patterns.

Maps analysed source files to include patterns over compiled outputs, and
matches paths against Ant-style patterns (``*`` stays within one
directory, ``**`` spans directories, ``?`` is a single character).
"""

import os
import re
from functools import lru_cache
from pathlib import Path, PurePath
from typing import Iterable, List, Pattern, Sequence

DEFAULT_SOURCE_SUFFIX = ".java"

# Matching follows the host filesystem: case-insensitive where normcase folds case.
_CASE_FLAGS = re.IGNORECASE if os.path.normcase("A") != "A" else 0


def resolve_include_patterns(
    source_files: Iterable[Path],
    source_dirs: Sequence[Path],
    suffix: str = DEFAULT_SOURCE_SUFFIX,
) -> List[str]:
    """
    Build include patterns for the compiled artifacts of ``source_files``.

    Every source root that contains a file contributes one pattern: the
    file path relative to that root, without ``suffix``, followed by ``*``
    so nested artifacts sharing the base name match too
    (``com/x/Foo.java`` -> ``com/x/Foo*`` matches ``Foo.class`` and
    ``Foo$Inner.class``). A file under no root contributes nothing.
    Overlapping roots yield one pattern each.

    Args:
        source_files: Analysed source files
        source_dirs: Candidate source-root directories
        suffix: Source-file extension to strip

    Returns:
        Patterns in input order
    """
    patterns: List[str] = []
    for source_file in source_files:
        source_path = PurePath(source_file)
        for source_dir in source_dirs:
            if source_path.is_relative_to(source_dir):
                relative = source_path.relative_to(source_dir).as_posix()
                if suffix and relative.endswith(suffix):
                    relative = relative[: -len(suffix)]
                patterns.append(relative + "*")
    return patterns


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Translate an Ant-style pattern to a regular expression.

    A trailing ``/`` is shorthand for ``/**``.
    """
    pattern = pattern.replace("\\", "/")
    if pattern.endswith("/"):
        pattern += "**"

    parts: List[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts), _CASE_FLAGS)


def matches_any(relative_path: str, patterns: Iterable[str]) -> bool:
    """Check a ``/``-separated relative path against Ant-style patterns."""
    return any(compile_pattern(p).fullmatch(relative_path) for p in patterns)
