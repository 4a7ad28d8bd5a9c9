"""servicelogger logging configuration.

Logs go to stderr so stdout only carries rendered templates and per-cluster
results. The level comes from `SERVICELOGGER_LOG_LEVEL` (default WARNING).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "SERVICELOGGER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the servicelogger hierarchy."""
    return logging.getLogger(name)


def setup_logging(level: Optional[str] = None, default: Optional[str] = None) -> None:
    """Configure servicelogger logging.

    Args:
        level: Optional override for `SERVICELOGGER_LOG_LEVEL`.
        default: Level used when neither override nor env var is set.
    """
    if level:
        os.environ[LOG_LEVEL_ENV] = level

    resolved = (os.getenv(LOG_LEVEL_ENV) or default or DEFAULT_LOG_LEVEL).upper()
    root = logging.getLogger("servicelogger")
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(resolved, logging.WARNING))
    root.propagate = False
