"""Tests for WDAY_* settings loading."""

import pytest
from pydantic import ValidationError

from workday_hub.auth.models import PasswordType
from workday_hub.config.settings import WorkdaySettings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.unit
def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WDAY_API_USERNAME", "isu_hr@acme")
    monkeypatch.setenv("WDAY_API_PASSWORD", "s3cret!")
    monkeypatch.setenv("WDAY_API_PASSWORD_TYPE", "Digest")
    monkeypatch.setenv("WDAY_WSDL", "file:///srv/wsdl/Human_Resources.wsdl")
    monkeypatch.setenv("WDAY_DEBUG", "true")
    monkeypatch.setenv("WDAY_OPERATION_TIMEOUT", "45")

    settings = get_settings()

    assert settings.api_username == "isu_hr@acme"
    assert settings.api_password == "s3cret!"
    assert settings.api_password_type is PasswordType.DIGEST
    assert settings.wsdl == "file:///srv/wsdl/Human_Resources.wsdl"
    assert settings.debug is True
    assert settings.operation_timeout == 45


@pytest.mark.unit
def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


@pytest.mark.unit
def test_password_type_defaults_to_text(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WDAY_API_PASSWORD_TYPE", raising=False)
    monkeypatch.delenv("WDAY_STRICT_SCHEMA", raising=False)
    monkeypatch.delenv("WDAY_TIMEOUT", raising=False)
    settings = WorkdaySettings(api_username="isu", api_password="pw")
    assert settings.api_password_type is PasswordType.TEXT
    assert settings.strict_schema is False
    assert settings.timeout == 300


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["PasswordDigest", "digest", "DIGEST"])
def test_password_type_aliases(raw: str) -> None:
    assert WorkdaySettings(api_password_type=raw).api_password_type is PasswordType.DIGEST


@pytest.mark.unit
def test_unknown_password_type_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        WorkdaySettings(api_password_type="Kerberos")
    assert "Unsupported password type" in str(exc_info.value)
