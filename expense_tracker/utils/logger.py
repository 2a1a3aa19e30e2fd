"""
Centralized logging configuration.

All modules should use `get_logger(__name__)` to obtain a logger.
Logs are JSON lines on stderr so they never mix with command output.
"""

import logging
import sys

import structlog


_initialized = False


def _init_logging() -> None:
    """Configure structlog once, on top of the stdlib root logger."""
    global _initialized
    if _initialized:
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _initialized = True


def configure_logging(level: str = "WARNING") -> None:
    """
    Send log records at `level` and above to stderr.

    Called once by the CLI after settings are loaded.
    """
    _init_logging()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_expense_tracker", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._expense_tracker = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))


def get_logger(name: str):
    """
    Get a named structlog logger.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    _init_logging()
    return structlog.get_logger(name)
