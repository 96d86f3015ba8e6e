"""
Application configuration models and helpers.

Centralizes settings management so the callback middleware, the HTTP routes
and the developer service share one validated configuration surface. Vendor
settings are loaded once per process and are immutable afterwards.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlparse

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file into the environment."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class BazaarSettings(BaseSettings):
    """Credentials and endpoints for the Cafe Bazaar developer API."""

    model_config = SettingsConfigDict(env_prefix="CAFEBAZAAR_", frozen=True)

    base_uri: str = Field(
        "https://pardakht.cafebazaar.ir/",
        description="Root of the vendor API; endpoint paths are resolved against it.",
    )
    client_id: str
    client_secret: str
    redirect_path: str = Field(
        ...,
        description=(
            "Callback location registered with the vendor. Either an absolute URL "
            "or a path resolved against the inbound request's scheme and host."
        ),
    )
    refresh_token: Optional[str] = Field(
        None,
        description="Optional bootstrap refresh token used until a code exchange completes.",
    )
    request_timeout_seconds: float = Field(10.0, gt=0)

    @field_validator("base_uri")
    @classmethod
    def _normalize_base_uri(cls, value: str) -> str:
        """Require an absolute http(s) URI ending with a slash."""
        parsed = urlparse(value.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("base_uri must be an absolute http(s) URL.")
        normalized = parsed.geturl()
        if not normalized.endswith("/"):
            normalized += "/"
        return normalized

    @field_validator("client_id", "client_secret", "redirect_path")
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("value must not be empty.")
        return value.strip()

    @field_validator("refresh_token")
    @classmethod
    def _blank_refresh_token_as_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def redirect_route_path(self) -> str:
        """Path component of the redirect location, used to match callbacks."""
        path = urlparse(self.redirect_path).path or "/"
        return path if path.startswith("/") else f"/{path}"


class StorageSettings(BaseSettings):
    """Selects and configures the token store backend."""

    model_config = SettingsConfigDict(env_prefix="CAFEBAZAAR_", frozen=True)

    token_store_backend: Literal["memory", "sqlite"] = "memory"
    token_store_path: str = Field(
        "var/bazaar_tokens.db",
        description="SQLite database file used when the sqlite backend is selected.",
    )
    token_encryption_secret: Optional[str] = Field(
        None,
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens. "
            "Falls back to the client secret when omitted."
        ),
    )


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    bazaar: BazaarSettings = Field(default_factory=BazaarSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "BazaarSettings",
    "StorageSettings",
    "get_settings",
]
