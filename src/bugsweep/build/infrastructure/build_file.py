"""
Build description loader.

Reads a YAML build description and turns it into variants and compile
tasks. Example::

    project_root: .
    platform:
      sdk_dir: /opt/android-sdk        # falls back to ANDROID_HOME / ANDROID_SDK_ROOT
      compile_sdk_version: android-34
    source_filter:
      exclude: ["**/generated/**"]
    spotbugs:
      html_report_enabled: true
      classpath: [tools/spotbugs/lib/spotbugs.jar]
    variants:
      - name: main
        kind: source_set
        source_dirs: [src/main/java]
        output_dirs: [build/classes/java/main]
        compile:
          command: [./gradlew, compileJava]
    test_variants: []
    unit_test_variants: []

Relative paths are resolved against ``project_root``, which is itself
relative to the build file.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from bugsweep.analysis.source_filter import SourceFilter
from bugsweep.build.application.task_graph import TaskGraph, capitalize
from bugsweep.build.application.tasks import CommandTask, NoOpTask
from bugsweep.build.application.variant_filter import VariantFilter
from bugsweep.build.domain.enums import VariantKind
from bugsweep.build.domain.models import Variant
from bugsweep.build.infrastructure.platform_sdk import PlatformSdk
from bugsweep.shared.domain.exceptions import ConfigurationError
from bugsweep.shared.infrastructure.execution.command_executor import CommandExecutor
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class CompileConfig(BaseModel):
    """Compile step of a variant; without a command the outputs are taken as built."""
    task: Optional[str] = None
    command: List[str] = Field(default_factory=list)


class VariantConfig(BaseModel):
    name: str = Field(..., min_length=1)
    kind: VariantKind = VariantKind.SOURCE_SET
    source_dirs: List[str] = Field(default_factory=list)
    output_dirs: List[str] = Field(default_factory=list)
    classpath: List[str] = Field(default_factory=list)
    compile: CompileConfig = Field(default_factory=CompileConfig)

    def compile_task_name(self) -> str:
        return self.compile.task or f"compile{capitalize(self.name)}Java"


class PlatformConfig(BaseModel):
    sdk_dir: Optional[str] = None
    compile_sdk_version: Optional[str] = None


class SourceFilterConfig(BaseModel):
    include: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)


class SpotBugsConfig(BaseModel):
    html_report_enabled: Optional[bool] = None
    classpath: List[str] = Field(default_factory=list)
    extra_args: List[str] = Field(default_factory=list)


class BuildFileModel(BaseModel):
    project_root: str = "."
    reports_dir: Optional[str] = None
    platform: Optional[PlatformConfig] = None
    source_filter: SourceFilterConfig = Field(default_factory=SourceFilterConfig)
    spotbugs: SpotBugsConfig = Field(default_factory=SpotBugsConfig)
    # Narrows test_variants and unit_test_variants; main variants are always analysed.
    include_variants: Optional[List[str]] = None
    variants: List[VariantConfig] = Field(default_factory=list)
    test_variants: List[VariantConfig] = Field(default_factory=list)
    unit_test_variants: List[VariantConfig] = Field(default_factory=list)


class BuildDescription:
    """Validated build description with paths resolved."""

    def __init__(self, model: BuildFileModel, project_root: Path):
        self.model = model
        self.project_root = project_root
        self.variants = [self._to_variant(v) for v in model.variants]
        self.test_variants = [self._to_variant(v) for v in model.test_variants]
        self.unit_test_variants = [self._to_variant(v) for v in model.unit_test_variants]

    @property
    def all_variant_configs(self) -> List[VariantConfig]:
        return [*self.model.variants, *self.model.test_variants, *self.model.unit_test_variants]

    @property
    def source_filter(self) -> SourceFilter:
        return SourceFilter(self.model.source_filter.include, self.model.source_filter.exclude)

    @property
    def variant_filter(self) -> VariantFilter:
        if self.model.include_variants is None:
            return VariantFilter()
        return VariantFilter.by_names(self.model.include_variants)

    @property
    def platform_sdk(self) -> Optional[PlatformSdk]:
        if self.model.platform is None:
            return None
        sdk_dir = self.model.platform.sdk_dir
        return PlatformSdk.from_environment(
            self.model.platform.compile_sdk_version,
            sdk_dir=self.resolve(sdk_dir) if sdk_dir else None,
        )

    @property
    def spotbugs_classpath(self) -> List[Path]:
        return [self.resolve(entry) for entry in self.model.spotbugs.classpath]

    def resolve(self, path: str) -> Path:
        candidate = Path(path).expanduser()
        return candidate if candidate.is_absolute() else self.project_root / candidate

    def register_compile_tasks(self, graph: TaskGraph, executor: Optional[CommandExecutor] = None) -> None:
        """
        Register one compile task per distinct compile task name.

        Variants may share a compile task; its first command wins.
        """
        for config in self.all_variant_configs:
            name = config.compile_task_name()
            if name in graph:
                continue
            if config.compile.command:
                graph.register(
                    CommandTask(
                        name,
                        command=config.compile.command,
                        cwd=self.project_root,
                        executor=executor,
                        description=f"Compile {config.name} sources",
                    )
                )
            else:
                graph.register(NoOpTask(name, f"Compiled outputs of {config.name} (pre-built)"))

    def _to_variant(self, config: VariantConfig) -> Variant:
        return Variant(
            name=config.name,
            kind=config.kind,
            source_dirs=tuple(self.resolve(d) for d in config.source_dirs),
            output_dirs=tuple(self.resolve(d) for d in config.output_dirs),
            compile_task=config.compile_task_name(),
            classpath=tuple(self.resolve(c) for c in config.classpath),
        )


def load_build_file(path: Path) -> BuildDescription:
    """
    Load and validate a YAML build description.

    Raises:
        ConfigurationError: If the file is missing, not valid YAML, or
            does not match the schema.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Build file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Build file must contain a mapping: {path}")

    try:
        model = BuildFileModel.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid build file {path}: {e}") from e

    project_root = Path(model.project_root).expanduser()
    if not project_root.is_absolute():
        project_root = (path.parent / project_root).resolve()

    description = BuildDescription(model, project_root)
    logger.info(
        "build_file_loaded",
        path=str(path),
        variants=len(description.variants),
        test_variants=len(description.test_variants),
        unit_test_variants=len(description.unit_test_variants),
    )
    return description
