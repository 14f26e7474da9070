"""Exporter settings.

Read once from the environment (``SCRAPEGATE_`` prefix) or a local ``.env``
file. List-valued settings are plain comma-separated strings; use the
derived properties (``allowlist``, ``enabled_collectors``, ...) rather than
splitting them at call sites.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Exporter settings.

    Attributes:
        LISTEN_ADDRESS (str): Address the HTTP listener binds to.
        LISTEN_PORT (int): Port the HTTP listener binds to.
        METRICS_PATH (str): Path under which to expose metrics.
        DISABLE_EXPORTER_METRICS (bool): Exclude metrics about the exporter itself
            (process_*, python_*, scrapegate_metric_handler_*).
        MAX_REQUESTS (int): Maximum number of parallel scrape requests. 0 disables the limit.
        DISABLE_DEFAULT_COLLECTORS (bool): Set all collectors to disabled by default.
        ENABLED_COLLECTORS (str): Comma-separated collectors to enable explicitly.
        DISABLED_COLLECTORS (str): Comma-separated collectors to disable explicitly.
        ALLOWED_IPS (str): Comma-separated IP addresses or CIDR ranges allowed to access
            the exporter. Empty means allow all.
        DISABLE_COMPRESSION (bool): Never gzip scrape responses.
        LOG_LEVEL (str): Minimum log level.
        LOG_FORMAT (str): ``text`` or ``json``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRAPEGATE_",
        env_file=".env",
        extra="ignore",
    )

    LISTEN_ADDRESS: str = "0.0.0.0"
    LISTEN_PORT: int = Field(default=9100, ge=0, le=65535)
    METRICS_PATH: str = "/metrics"
    DISABLE_EXPORTER_METRICS: bool = False
    MAX_REQUESTS: int = Field(default=40, ge=0)
    DISABLE_DEFAULT_COLLECTORS: bool = False
    ENABLED_COLLECTORS: str = ""
    DISABLED_COLLECTORS: str = ""
    ALLOWED_IPS: str = ""
    DISABLE_COMPRESSION: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["text", "json"] = "text"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().upper()
            return "WARNING" if value == "WARN" else value
        return value

    @field_validator("METRICS_PATH")
    @classmethod
    def _absolute_metrics_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"METRICS_PATH must start with '/', got {value!r}")
        return value

    @field_validator("ALLOWED_IPS")
    @classmethod
    def _non_blank_allowlist(cls, value: str) -> str:
        # "," or " , " would otherwise collapse into "allow everyone".
        if value.strip() and not _split_csv(value):
            raise ValueError(f"ALLOWED_IPS has no usable entries: {value!r}")
        return value

    @property
    def allowlist(self) -> list[str]:
        """Allow-list entries, whitespace-trimmed, in configured order."""
        return _split_csv(self.ALLOWED_IPS)

    @property
    def enabled_collectors(self) -> list[str]:
        return _split_csv(self.ENABLED_COLLECTORS)

    @property
    def disabled_collectors(self) -> list[str]:
        return _split_csv(self.DISABLED_COLLECTORS)


settings = Settings()
