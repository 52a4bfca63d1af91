"""Singleton logging configuration: two-phase initialization.

Phase 1: setup_logging(), called BEFORE litellm is imported.
  Sets LITELLM_LOG, sends log records to stderr (stdout carries the
  run summary) and sets the level of the ``stcgen`` package logger.

Phase 2: cleanup_third_party_handlers(), called AFTER all imports.
  Clears litellm's duplicate StreamHandlers added at import time.

Both phases are idempotent (guarded by module-level flags).
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

PACKAGE_LOGGER = "stcgen"

# litellm attaches its own handlers to these at import time
_LITELLM_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy")

# Third-party loggers held at WARNING whatever the package level
_SUPPRESSED_LOGGERS = (*_LITELLM_LOGGERS, "httpx", "httpcore")

_phase1_done = False
_phase2_done = False


def setup_logging(level: str = "INFO") -> None:
    """Phase 1: route logs to stderr and set the package level.

    The root logger stays at WARNING so only ``stcgen`` records below
    that reach the console. Idempotent; a second call is a no-op.
    """
    global _phase1_done  # noqa: PLW0603
    if _phase1_done:
        return
    _phase1_done = True

    # litellm._logging reads this at import time to set handler level.
    os.environ.setdefault("LITELLM_LOG", "WARNING")

    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )
    set_level(level)

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_level(level: str) -> None:
    """Change the ``stcgen`` logger level (``--verbose`` uses DEBUG)."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(
        getattr(logging, level.upper())
    )


def cleanup_third_party_handlers() -> None:
    """Phase 2: drop litellm's own handlers so records reach root once.

    Idempotent; a second call is a no-op.
    """
    global _phase2_done  # noqa: PLW0603
    if _phase2_done:
        return
    _phase2_done = True

    for name in _LITELLM_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
