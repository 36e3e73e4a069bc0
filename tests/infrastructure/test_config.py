"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.infrastructure.config import Settings, load_settings

_VARS = (
    "STOREFRONT_ENV",
    "STOREFRONT_DATA_DIR",
    "STOREFRONT_CURRENCIES",
    "STOREFRONT_DEFAULT_CURRENCY",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadSettings:

    def test_defaults(self, clean_env):
        s = load_settings()
        assert s.environment == "development"
        assert s.currencies == ["CAD", "EUR", "GBP", "USD"]
        assert s.default_currency == "CAD"
        assert s.log_level == "DEBUG"
        assert s.data_dir.name == "data"
        assert not s.is_production

    def test_overrides(self, clean_env, tmp_path):
        clean_env.setenv("STOREFRONT_ENV", "Production")
        clean_env.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
        clean_env.setenv("STOREFRONT_CURRENCIES", "usd, eur ,")
        clean_env.setenv("STOREFRONT_DEFAULT_CURRENCY", "usd")

        s = load_settings()

        assert s.is_production
        assert s.log_level == "INFO"
        assert s.data_dir == Path(tmp_path)
        assert s.currencies == ["USD", "EUR"]
        assert s.default_currency == "USD"

    def test_explicit_log_level(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "error")
        assert load_settings().log_level == "ERROR"

    def test_default_currency_must_be_supported(self, clean_env):
        clean_env.setenv("STOREFRONT_CURRENCIES", "USD")
        with pytest.raises(ValidationError, match="Default currency CAD"):
            load_settings()


class TestSettings:

    def test_direct_construction_validates(self):
        with pytest.raises(ValidationError):
            Settings(currencies=["EUR"], default_currency="GBP")
