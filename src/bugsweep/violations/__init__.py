"""
Violation aggregate.

Exports:
- Violation: one attributed finding
- ToolViolations: per-tool error/warning tally
- ViolationSink: thread-safe append-only aggregate shared across tools
"""

from bugsweep.violations.models import ToolViolations, Violation
from bugsweep.violations.sink import ViolationSink

__all__ = ["Violation", "ToolViolations", "ViolationSink"]
