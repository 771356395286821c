"""Application configuration loaded from environment variables.

All variables are prefixed with ``REQLOG_``; a ``.env`` file is read too.
List-valued settings are comma-separated, custom fields are a JSON object::

    REQLOG_REMOTE_ADDRESS_HEADERS=X-Real-IP,X-Forwarded-For
    REQLOG_IGNORED_PATHS=/health,/favicon.ico
    REQLOG_CUSTOM_FIELDS={"service": "billing"}
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reqlog.schemas import DEFAULT_MESSAGE, LoggerOptions


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REQLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---- Logging ----
    log_level: str = "INFO"
    log_format: str = Field(default="logfmt", description="logfmt, json or console")

    # ---- Access records ----
    message: str = DEFAULT_MESSAGE
    remote_address_headers: str = ""  # Comma-separated, first non-empty wins
    ignored_paths: str = ""  # Comma-separated, exact match
    custom_fields: Dict[str, Any] = Field(default_factory=dict)

    # ---- Demo server ----
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    @field_validator("log_format")
    @classmethod
    def known_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("logfmt", "json", "console"):
            raise ValueError("log_format must be one of: logfmt, json, console")
        return v

    def to_options(self, sink: Optional[Any] = None) -> LoggerOptions:
        """Build the request logger configuration from these settings."""
        return LoggerOptions(
            message=self.message,
            custom_fields=self.custom_fields,
            remote_address_headers=_split_csv(self.remote_address_headers),
            ignored_paths=frozenset(_split_csv(self.ignored_paths)),
            sink=sink,
        )


@lru_cache()
def get_settings() -> Settings:
    """Cached singleton accessor for application settings."""
    return Settings()
