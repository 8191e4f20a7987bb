"""
bugsweep - per-variant SpotBugs orchestration.

Runs SpotBugs once per build variant over the classes compiled from the
filtered sources of that variant, renders reports and aggregates the
violations of every run into one sink for a final evaluation task.
"""

__version__ = "0.1.0"
