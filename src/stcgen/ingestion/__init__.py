"""Source tree ingestion: list files, describe them, collect the result."""

from pathlib import Path

from stcgen.constants import BINARY_DETECTION_BUFFER
from stcgen.ingestion.schemas import CollectedFiles

__all__ = [
    "CollectedFiles",
    "is_binary",
]


def is_binary(path: Path) -> bool:
    """Return True if the file appears to be binary (null byte in first N bytes)."""
    try:
        with open(path, "rb") as f:
            chunk = f.read(BINARY_DETECTION_BUFFER)
        return b"\x00" in chunk
    except OSError:
        return True
