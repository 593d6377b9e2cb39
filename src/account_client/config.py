"""
Settings for talking to the account service.

`AccountSettings` is a pydantic-settings model populated from environment
variables (prefix ``ACCOUNTS_``) or a local ``.env`` file. It is read once at
startup and passed explicitly to `AccountClient.from_settings`; nothing in this
package consults process-wide state on its own. `LoggingSettings` covers log
output and is consumed by `configure_logging`.
"""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_RETRY_INTERVAL_SECONDS = 1.0
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class AccountSettings(BaseSettings):
    """
    Configuration for the account service client.

    Attributes:
        url: RPC endpoint of the account service (``ACCOUNTS_URL``). Left
             unset, every client operation fails with `ConfigurationError`.
        request_timeout: Per-request HTTP timeout in seconds.
        resolve_timeout: Budget in seconds for transactor endpoint resolution;
                         zero or negative retries forever.
        retry_interval: Fixed pause in seconds between resolution attempts.
    """

    model_config = SettingsConfigDict(
        env_prefix="ACCOUNTS_",
        env_file=".env",
        extra="ignore",
    )

    url: Optional[str] = None
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT_SECONDS, gt=0)
    resolve_timeout: float = -1
    retry_interval: float = Field(default=DEFAULT_RETRY_INTERVAL_SECONDS, ge=0)

    @field_validator("url")
    @classmethod
    def _blank_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class LoggingSettings(BaseSettings):
    """
    Log output for worker processes (``ACCOUNTS_LOG_LEVEL``, ``ACCOUNTS_LOG_FORMAT``).

    An unknown level name falls back to ``INFO`` rather than failing startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="ACCOUNTS_LOG_",
        env_file=".env",
        extra="ignore",
    )

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    datefmt: str = DEFAULT_LOG_DATEFMT

    @property
    def level_number(self) -> int:
        level = logging.getLevelName(self.level.strip().upper())
        return level if isinstance(level, int) else logging.INFO


__all__ = [
    "AccountSettings",
    "LoggingSettings",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_RETRY_INTERVAL_SECONDS",
]
