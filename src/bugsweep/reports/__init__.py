"""Report rendering, parsing and violation collection."""
