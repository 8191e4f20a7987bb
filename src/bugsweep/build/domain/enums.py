"""
Build domain enums.

Defines task execution states, variant kinds and configurator states.
"""

from enum import Enum


class TaskState(Enum):
    """Task execution state."""

    PENDING = 0  # Registered, not scheduled yet
    RUNNING = 1  # Action currently executing
    SUCCEEDED = 2  # Action completed
    FAILED = 3  # Action raised
    SKIPPED = 4  # A dependency did not succeed, or the build stopped


class VariantKind(Enum):
    """
    Kind of buildable unit.

    Platform kinds compile against the platform base library, which must
    be on the analysis auxiliary classpath.
    """

    SOURCE_SET = "source_set"  # Plain JVM source set (main, test, ...)
    PLATFORM = "platform"  # Platform application/library build flavor
    PLATFORM_TEST = "platform_test"  # Instrumented test variant of a flavor
    PLATFORM_UNIT_TEST = "platform_unit_test"  # Local unit-test variant of a flavor


class ConfigurationState(Enum):
    """
    Lifecycle of a tool configurator.

    UNCONFIGURED -> CONFIGURING -> CONFIGURED. There is no way back;
    requests made outside UNCONFIGURED are no-ops.
    """

    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    CONFIGURED = "configured"
