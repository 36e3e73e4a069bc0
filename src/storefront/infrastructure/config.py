"""Runtime configuration read from environment variables.

Every setting has a default, so the CLI works out of the box; override
with the ``STOREFRONT_*`` variables (or ``LOG_LEVEL``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from storefront.domain.exceptions import ValidationError

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_CURRENCIES = ("CAD", "EUR", "GBP", "USD")

_LEVEL_BY_ENV = {
    "production": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def _get_list(name: str, default: tuple[str, ...], separator: str = ",") -> list[str]:
    """Parse a comma-separated environment variable."""
    raw = os.getenv(name, "")
    if not raw.strip():
        return list(default)
    return [item.strip() for item in raw.split(separator) if item.strip()]


def _get_path(name: str, default: Path) -> Path:
    raw = os.getenv(name, "").strip()
    return Path(raw).expanduser() if raw else default


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    data_dir: Path = _PROJECT_ROOT / "data"
    currencies: list[str] = field(default_factory=lambda: list(DEFAULT_CURRENCIES))
    default_currency: str = "CAD"
    log_level: str = "DEBUG"

    def __post_init__(self) -> None:
        if self.default_currency not in self.currencies:
            raise ValidationError(
                f"Default currency {self.default_currency} is not one of "
                f"the supported currencies ({', '.join(self.currencies)})"
            )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def load_settings() -> Settings:
    environment = os.getenv("STOREFRONT_ENV", "development").strip().lower()
    return Settings(
        environment=environment,
        data_dir=_get_path("STOREFRONT_DATA_DIR", _PROJECT_ROOT / "data"),
        currencies=[code.upper() for code in _get_list("STOREFRONT_CURRENCIES", DEFAULT_CURRENCIES)],
        default_currency=os.getenv("STOREFRONT_DEFAULT_CURRENCY", "CAD").strip().upper(),
        log_level=os.getenv("LOG_LEVEL", _LEVEL_BY_ENV.get(environment, "INFO")).upper(),
    )
