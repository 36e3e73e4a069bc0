"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "CAD"

_supported_currencies: frozenset[str] = frozenset({"CAD", "EUR", "GBP", "USD"})
_default_currency: str = DEFAULT_CURRENCY


def supported_currencies() -> frozenset[str]:
    """Return the currency codes Money currently accepts."""
    return _supported_currencies


def default_currency() -> str:
    """Return the currency used when none is given."""
    return _default_currency


def set_supported_currencies(codes: Iterable[str], default: str | None = None) -> None:
    """Replace the accepted currency set (called once by the composition root).

    *default* becomes the fallback currency; when omitted the current
    fallback is kept, and it must still be in the new set.
    """
    global _supported_currencies, _default_currency
    normalized = frozenset(code.strip().upper() for code in codes if code and code.strip())
    if not normalized:
        raise ValidationError("At least one supported currency is required")
    fallback = (default or _default_currency).strip().upper()
    if fallback not in normalized:
        raise ValidationError(
            f"Default currency {fallback} is not one of the supported currencies "
            f"({', '.join(sorted(normalized))})"
        )
    _supported_currencies = normalized
    _default_currency = fallback


def ensure_supported_currency(currency: str) -> str:
    """Normalize *currency* and check it against the supported set."""
    if not isinstance(currency, str) or not currency.strip():
        raise ValidationError("Currency is required")
    code = currency.strip().upper()
    if code not in _supported_currencies:
        raise ValidationError(
            f"Unsupported currency: {code}. "
            f"Supported: {', '.join(sorted(_supported_currencies))}"
        )
    return code


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        currency = _default_currency if self.currency is None else self.currency
        object.__setattr__(self, "currency", ensure_supported_currency(currency))

    # --- Arithmetic -----------------------------------------------------------

    def add(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def multiply(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def greater_than(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def less_than(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __gt__ = greater_than
    __lt__ = less_than

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot operate on different currencies: {self.currency} and {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str | None = None) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    @staticmethod
    def zero(currency: str | None = None) -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """A whole number of units between 1 and 999.

    Changing a quantity produces a new instance, re-validated against
    the same bounds.
    """

    value: int

    MIN = 1
    MAX = 999

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < self.MIN:
            raise ValidationError(f"Quantity must be at least {self.MIN}")
        if self.value > self.MAX:
            raise ValidationError(f"Quantity cannot exceed {self.MAX}")

    def increase(self, amount: int) -> Quantity:
        return Quantity(self.value + amount)

    def decrease(self, amount: int) -> Quantity:
        return Quantity(self.value - amount)

    def __str__(self) -> str:
        return str(self.value)


_SKU_PATTERN = re.compile(r"^[A-Z0-9-]{3,50}$")


@dataclass(frozen=True)
class Sku:
    """Stock keeping unit, stored trimmed and upper-cased."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError("SKU must be a string")
        normalized = self.value.strip().upper()
        if not normalized:
            raise ValidationError("SKU cannot be empty")
        if not _SKU_PATTERN.match(normalized):
            raise ValidationError(
                f"Invalid SKU format: {normalized}. Must be 3-50 characters, "
                "uppercase letters, numbers, and hyphens only."
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


_SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def slugify(name: str) -> str:
    slug = name.strip().lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"[\s_-]+", "-", slug, flags=re.ASCII)
    return slug.strip("-")


@dataclass(frozen=True)
class ProductCategory:
    """Catalog category. The slug is derived from the name unless given."""

    name: str
    slug: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Category name cannot be empty")
        name = self.name.strip()
        slug = (self.slug or "").strip() or slugify(name)
        if not slug:
            raise ValidationError("Category slug cannot be empty")
        if not _SLUG_PATTERN.match(slug):
            raise ValidationError(
                "Category slug must contain only lowercase letters, numbers, and hyphens"
            )
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "slug", slug)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ShippingAddress:
    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        labels = {
            "street": "Street",
            "city": "City",
            "state": "State",
            "zip_code": "Zip code",
            "country": "Country",
        }
        for attr, label in labels.items():
            raw = getattr(self, attr)
            if not isinstance(raw, str) or not raw.strip():
                raise ValidationError(f"{label} is required")
            object.__setattr__(self, attr, raw.strip())

    def __str__(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}"


_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Email cannot be empty")
        normalized = self.value.strip().lower()
        if not _EMAIL_PATTERN.match(normalized):
            raise ValidationError(f"Invalid email format: {normalized}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
