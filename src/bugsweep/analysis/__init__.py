"""
Analysis orchestration.

Maps filtered sources to compiled artifacts and configures one analysis
task per variant.
"""
