"""Logging configuration - central setup for the command-line entry point.

Every module does ``logger = logging.getLogger(__name__)`` and inherits this
configuration. Levels resolve in precedence order::

    --log-level option  >  CHECK_AI_LOG_LEVEL env var  >  WARNING
"""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "CHECK_AI_LOG_LEVEL"

# WARNING level, minimal
_FMT_MINIMAL = "%(levelname)s: %(message)s"

# INFO level, timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level, with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"


def resolve_level(level: Optional[str] = None) -> str:
    """Pick the effective level name from the option, then the environment."""
    return level or os.environ.get(LOG_LEVEL_ENV) or "WARNING"


def setup_logging(level: Optional[str] = None) -> int:
    """Configure logging of the ``check_ai`` package to stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            falls back to ``CHECK_AI_LOG_LEVEL`` and then WARNING

    Returns:
        The numeric level applied
    """
    numeric_level = _parse_level(resolve_level(level))

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    package_logger = logging.getLogger("check_ai")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)

    return numeric_level


def _parse_level(level: Optional[str]) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
