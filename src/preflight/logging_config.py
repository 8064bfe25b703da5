"""Singleton logging configuration.

setup_logging() configures the root logger once per process. The CLI
calls it before any analysis runs; library callers may skip it and
install their own handlers instead.

Idempotent (guarded by a module-level flag).
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers to suppress to WARNING
_SUPPRESSED_LOGGERS = (
    "pydantic",
    "pathspec",
)

_setup_done = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logger format and level.

    Idempotent: second call is a no-op.
    """
    global _setup_done  # noqa: PLW0603
    if _setup_done:
        return
    _setup_done = True

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(logging.WARNING)
