"""
Build domain models.

Variants are produced by the build description and are read-only to the
analysis orchestration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from bugsweep.build.domain.enums import VariantKind


@dataclass(frozen=True)
class Variant:
    """
    One buildable unit requiring its own analysis run.

    Attributes:
        name: Variant or source-set name (``debug``, ``main``, ``debugUnitTest``)
        kind: Source set or platform flavor
        source_dirs: Source-root directories owned by the variant
        output_dirs: Compiled-output directories written by the compile task
        compile_task: Name of the compile task in the task graph
        classpath: Compile classpath of the variant
    """

    name: str
    kind: VariantKind
    source_dirs: Tuple[Path, ...]
    output_dirs: Tuple[Path, ...]
    compile_task: str
    classpath: Tuple[Path, ...] = field(default_factory=tuple)

    @property
    def requires_platform_library(self) -> bool:
        """Platform flavors (and their test variants) compile against the SDK base library."""
        return self.kind is not VariantKind.SOURCE_SET

    @property
    def only_existing_source_dirs(self) -> bool:
        # Source sets declare conventional roots that are often absent on disk.
        return self.kind is VariantKind.SOURCE_SET
