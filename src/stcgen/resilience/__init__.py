"""Error classification helpers."""
