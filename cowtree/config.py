from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable

_SUPPORTED_COPY_MODES = {"deep", "shallow", "none"}
_SUPPORTED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _normalise_copy_mode(value: str | None) -> str:
    if value is None or value.strip() == "":
        return "deep"
    return value.strip().lower()


def _normalise_log_level(value: str | None) -> str:
    if value is None or value.strip() == "":
        return "WARNING"
    value = value.strip().upper()
    if value not in _SUPPORTED_LOG_LEVELS:
        raise ValueError(f"Unsupported log level '{value}'. Expected one of {_SUPPORTED_LOG_LEVELS}.")
    return value


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class RuntimeConfig:
    element_copy: str
    log_level: str
    validate: bool

    @property
    def copier(self) -> Callable[[Any], Any]:
        """Callable used to duplicate an element when a node is cloned.

        The mode is checked here rather than at load time so that callers
        passing their own copier are unaffected by a bad setting.
        """

        if self.element_copy not in _SUPPORTED_COPY_MODES:
            raise ValueError(
                f"Unsupported element copy mode '{self.element_copy}'. "
                f"Expected one of {_SUPPORTED_COPY_MODES}."
            )
        if self.element_copy == "deep":
            return copy.deepcopy
        if self.element_copy == "shallow":
            return copy.copy
        return _identity


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("cowtree")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    # re-apply the level to loggers issued under an earlier configuration
    from .logging import refresh_logger_levels

    refresh_logger_levels(level)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    config = RuntimeConfig(
        element_copy=_normalise_copy_mode(os.getenv("COWTREE_ELEMENT_COPY")),
        log_level=_normalise_log_level(os.getenv("COWTREE_LOG_LEVEL")),
        validate=_bool_from_env(os.getenv("COWTREE_VALIDATE"), default=False),
    )
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
