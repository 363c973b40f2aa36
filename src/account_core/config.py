"""Configuration for the account-core execution layer.

Settings are plain dataclasses so they can be built in code, in tests, or
from environment variables via ``ExecutorConfig.from_env()``.
"""

from __future__ import annotations

import logging
import logging.config
import math
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

LOCK_TIMEOUT_ENV = "ACCOUNT_CORE_LOCK_TIMEOUT_SECONDS"
LOG_LEVEL_ENV = "ACCOUNT_CORE_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s"


class ConfigurationError(ValueError):
    """Raised when a configuration value is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


@dataclass
class ExecutorConfig:
    """Configuration for TransactionalExecutor.

    Attributes:
        lock_timeout_seconds: Bound on account lock waits; None blocks
            until granted (default: None)
        log_level: Level for the ``account_core`` logger (default: "INFO")
    """

    lock_timeout_seconds: float | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        timeout = self.lock_timeout_seconds
        if timeout is not None and (not math.isfinite(timeout) or timeout < 0):
            raise ConfigurationError(
                f"lock_timeout_seconds must be a finite number >= 0, got {timeout}",
                field="lock_timeout_seconds",
            )
        if not isinstance(getattr(logging, self.log_level.upper(), None), int):
            raise ConfigurationError(f"Invalid log level: {self.log_level}", field="log_level")
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExecutorConfig:
        """Build a config from environment variables.

        Unset or blank variables fall back to the defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}

        raw_timeout = env.get(LOCK_TIMEOUT_ENV, "").strip()
        if raw_timeout:
            try:
                kwargs["lock_timeout_seconds"] = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"{LOCK_TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}",
                    field="lock_timeout_seconds",
                ) from e

        raw_level = env.get(LOG_LEVEL_ENV, "").strip()
        if raw_level:
            kwargs["log_level"] = raw_level

        return cls(**kwargs)


def configure_logging(config: ExecutorConfig) -> logging.Logger:
    """Route ``account_core`` log records to the console at the configured level."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console_handler": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": config.log_level,
                },
            },
            "loggers": {
                "account_core": {
                    "handlers": ["console_handler"],
                    "level": config.log_level,
                    "propagate": False,
                },
            },
        }
    )
    logger = logging.getLogger("account_core")
    logger.debug("Logging configured at level %s", config.log_level)
    return logger
