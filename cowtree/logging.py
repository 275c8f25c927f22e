"""Project-wide logging utilities that honour `RuntimeConfig`."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from . import config as cw_config

# Most loggers are bound to module globals at import time, so they are kept
# here and re-levelled whenever the runtime configuration is rebuilt.
_ISSUED: Dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger configured according to the runtime configuration."""

    logger_name = "cowtree" if name is None else f"cowtree.{name}"
    runtime = cw_config.runtime_config()
    logger = _ISSUED.get(logger_name)
    if logger is None:
        logger = logging.getLogger(logger_name)
        _ISSUED[logger_name] = logger
    logger.setLevel(runtime.log_level)
    return logger


def refresh_logger_levels(level: str) -> None:
    for logger in _ISSUED.values():
        logger.setLevel(level)


__all__ = ["get_logger", "refresh_logger_levels"]
