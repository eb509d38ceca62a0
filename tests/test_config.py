from __future__ import annotations

import allure
import pytest

from oasst_client.config import ApiSettings, ConfigurationError, Settings

pytestmark = [
    allure.epic("Backend API"),
    allure.feature("Configuration"),
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in (
        "OASST_API_URL",
        "OASST_API_KEY",
        "OASST_REQUEST_TIMEOUT_SECONDS",
        "FASTAPI_URL",
        "FASTAPI_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_api_settings(monkeypatch) -> None:
    monkeypatch.setenv("OASST_API_URL", "http://backend.test")
    monkeypatch.setenv("OASST_API_KEY", "secret")
    monkeypatch.setenv("OASST_REQUEST_TIMEOUT_SECONDS", "12.5")

    settings = Settings.from_env()

    assert settings.api == ApiSettings(
        api_url="http://backend.test",
        api_key="secret",
        request_timeout_seconds=12.5,
    )


def test_from_env_accepts_legacy_names(monkeypatch) -> None:
    monkeypatch.setenv("FASTAPI_URL", "http://legacy.test")
    monkeypatch.setenv("FASTAPI_KEY", "legacy")

    settings = Settings.from_env()

    assert settings.api.api_url == "http://legacy.test"
    assert settings.api.api_key == "legacy"
    assert settings.api.request_timeout_seconds is None


def test_from_env_prefers_new_names_over_legacy(monkeypatch) -> None:
    monkeypatch.setenv("OASST_API_URL", "http://new.test")
    monkeypatch.setenv("FASTAPI_URL", "http://legacy.test")

    assert Settings.from_env().api.api_url == "http://new.test"


def test_from_env_rejects_non_numeric_timeout(monkeypatch) -> None:
    monkeypatch.setenv("OASST_REQUEST_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ConfigurationError, match="Invalid number"):
        Settings.from_env()


def test_validate_for_api_requires_url() -> None:
    settings = Settings(api=ApiSettings(api_key="secret"))

    with pytest.raises(ValueError, match="Backend API URL is required"):
        settings.validate_for_api()


def test_validate_for_api_rejects_relative_url() -> None:
    settings = Settings(api=ApiSettings(api_url="backend.test", api_key="secret"))

    with pytest.raises(ValueError, match="Invalid backend API URL"):
        settings.validate_for_api()


def test_validate_for_api_requires_key() -> None:
    settings = Settings(api=ApiSettings(api_url="https://backend.test"))

    with pytest.raises(ValueError, match="Backend API key is required"):
        settings.validate_for_api()


def test_validate_for_api_rejects_non_positive_timeout() -> None:
    settings = Settings(
        api=ApiSettings(
            api_url="https://backend.test",
            api_key="secret",
            request_timeout_seconds=0,
        ),
    )

    with pytest.raises(ValueError, match="must be > 0"):
        settings.validate_for_api()


def test_validate_for_api_accepts_complete_settings() -> None:
    settings = Settings(api=ApiSettings(api_url="http://backend.test:8080", api_key="secret"))
    settings.validate_for_api()
