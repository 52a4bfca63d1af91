"""Error classification for structured error handling.

A failed manifest run always propagates its exception; the class is
attached to the log line so an operator can tell a rate limit or an
expired key from a bug without reading the traceback.
"""

from __future__ import annotations

import asyncio
from enum import Enum


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, dropped connection
    SERVER = "server"  # 5xx
    TIMEOUT = "timeout"  # 408, deadline exceeded
    CLIENT = "client"  # other 4xx: bad key, unknown model
    FILESYSTEM = "filesystem"  # unreadable tree, unwritable manifest
    UNKNOWN = "unknown"


def classify_error(error: BaseException) -> ErrorClass:
    """Classify an error for logging.

    LiteLLM exceptions carry an HTTP ``status_code`` and are classified
    by it. Everything else is classified by exception type.
    """
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 408:
            return ErrorClass.TIMEOUT
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorClass.TIMEOUT
    if isinstance(error, ConnectionError):
        return ErrorClass.TRANSIENT
    if isinstance(error, OSError):
        return ErrorClass.FILESYSTEM

    return ErrorClass.UNKNOWN


_RETRYABLE = frozenset({
    ErrorClass.TRANSIENT,
    ErrorClass.SERVER,
    ErrorClass.TIMEOUT,
})


def is_retryable(error: BaseException) -> bool:
    """Return True if re-running the same command may succeed."""
    return classify_error(error) in _RETRYABLE
