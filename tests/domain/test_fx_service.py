"""Tests for the currency conversion domain service."""

from decimal import Decimal

import pytest

from src.domain.errors import InvalidRate, UnsupportedCurrency
from src.domain.services.fx import (
    build_rate_table,
    convert_amount,
    from_base,
    get_rate,
    to_base,
    validate_rate_table,
)


def _rates():
    return build_rate_table(
        "TWD",
        {"TWD": "1", "USD": "0.03", "JPY": "4.7"},
    )


def test_build_rate_table_pins_base_and_normalizes_codes() -> None:
    """The base rate is always 1 and codes are upper-cased."""
    rates = build_rate_table("twd", {"usd": 0.03, "TWD": "2"})

    assert rates.base_currency == "TWD"
    assert rates.rates["TWD"] == Decimal("1")
    assert rates.rates["USD"] == Decimal("0.03")


def test_build_rate_table_keeps_unparsable_values_as_missing() -> None:
    """Garbage rate values should surface as InvalidRate on lookup."""
    rates = build_rate_table("TWD", {"USD": "abc"})

    assert rates.rates["USD"] is None
    with pytest.raises(InvalidRate):
        get_rate(rates, "USD")


def test_to_base_divides_and_from_base_multiplies() -> None:
    """Conversions route through the base currency."""
    rates = _rates()

    assert to_base(Decimal("30"), "USD", rates) == Decimal("1000")
    assert from_base(Decimal("1000"), "JPY", rates) == Decimal("4700.0")


def test_convert_amount_between_foreign_currencies() -> None:
    """USD to JPY goes USD -> TWD -> JPY."""
    rates = _rates()

    assert convert_amount(Decimal("3"), "USD", "JPY", rates) == Decimal("470")


def test_convert_amount_same_currency_is_identity() -> None:
    """Same-currency conversions return the amount unchanged."""
    rates = _rates()

    assert convert_amount(Decimal("12.345"), "usd", "USD", rates) == Decimal(
        "12.345"
    )


def test_round_trip_through_foreign_currency() -> None:
    """base -> X -> base returns the original amount."""
    rates = _rates()
    amount = Decimal("1234.56")

    for currency in ("USD", "JPY", "TWD"):
        converted = convert_amount(amount, "TWD", currency, rates)
        back = convert_amount(converted, currency, "TWD", rates)
        assert abs(back - amount) < Decimal("1e-20")


def test_unknown_currency_raises_unsupported_currency() -> None:
    """A currency absent from the table is a conversion error."""
    rates = _rates()

    with pytest.raises(UnsupportedCurrency) as excinfo:
        to_base(Decimal("1"), "EUR", rates)

    assert excinfo.value.currency == "EUR"


def test_same_currency_conversion_still_validates_currency() -> None:
    """An unknown currency fails even when source and target match."""
    with pytest.raises(UnsupportedCurrency):
        convert_amount(Decimal("1"), "EUR", "EUR", _rates())


@pytest.mark.parametrize("bad_rate", [0, -1, None, "NaN", "Infinity"])
def test_unusable_rates_raise_invalid_rate(bad_rate) -> None:
    """Zero, negative, missing and non-finite rates are rejected."""
    rates = build_rate_table("TWD", {"USD": bad_rate})

    with pytest.raises(InvalidRate):
        from_base(Decimal("100"), "USD", rates)


def test_validate_rate_table_checks_every_currency() -> None:
    """Validation passes for known currencies and fails on the first gap."""
    rates = _rates()

    validate_rate_table(rates, ["TWD", "USD", "JPY"])
    with pytest.raises(UnsupportedCurrency):
        validate_rate_table(rates, ["USD", "GBP"])
