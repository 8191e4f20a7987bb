"""
Build domain.

Exports:
- Variant: one buildable unit (source set or platform flavor)
- VariantKind, TaskState, ConfigurationState
"""

from bugsweep.build.domain.enums import ConfigurationState, TaskState, VariantKind
from bugsweep.build.domain.models import Variant

__all__ = ["Variant", "VariantKind", "TaskState", "ConfigurationState"]
