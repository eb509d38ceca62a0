"""Runtime configuration for the backend API client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import urlparse


class ConfigurationError(ValueError):
    """Backend endpoint settings are missing or malformed."""


@dataclass(slots=True)
class ApiSettings:
    """Backend endpoint settings."""

    api_url: str = ""
    api_key: str = ""
    request_timeout_seconds: float | None = None


@dataclass(slots=True)
class Settings:
    """Application settings grouped by domain concerns."""

    api: ApiSettings = field(default_factory=ApiSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment, accepting the legacy FASTAPI_* names."""

        return cls(
            api=ApiSettings(
                api_url=_env_first("OASST_API_URL", "FASTAPI_URL"),
                api_key=_env_first("OASST_API_KEY", "FASTAPI_KEY"),
                request_timeout_seconds=_env_optional_float("OASST_REQUEST_TIMEOUT_SECONDS"),
            ),
        )

    def validate_for_api(self) -> None:
        """Raise configuration error if the backend endpoint cannot be used."""

        if not self.api.api_url:
            raise ConfigurationError(
                "Backend API URL is required. Set OASST_API_URL or pass --api-url.",
            )
        _validate_api_url(self.api.api_url)
        if not self.api.api_key:
            raise ConfigurationError(
                "Backend API key is required. Set OASST_API_KEY or pass --api-key.",
            )
        timeout = self.api.request_timeout_seconds
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("OASST_REQUEST_TIMEOUT_SECONDS must be > 0.")


def _env_first(*names: str) -> str:
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


def _env_optional_float(name: str) -> float | None:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid number for {name}: {value!r}") from exc


def _validate_api_url(value: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(
            "Invalid backend API URL: "
            f"{value!r}. Expected an absolute URL with http:// or https:// scheme.",
        )
