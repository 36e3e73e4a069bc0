import pytest

from storefront.domain.model.value_objects import (
    default_currency,
    set_supported_currencies,
    supported_currencies,
)


@pytest.fixture(autouse=True)
def _restore_currency_policy():
    """Tests may narrow or widen the accepted currencies; put them back."""
    saved = supported_currencies()
    saved_default = default_currency()
    yield
    set_supported_currencies(saved, default=saved_default)
