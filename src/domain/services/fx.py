"""Domain services for currency conversion.

Every conversion routes through the base currency of the rate table: an
amount is first divided by its currency's rate to reach the base, then
multiplied by the target currency's rate. The table therefore only needs
entries relative to the base.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation

from src.domain.errors import InvalidRate, UnsupportedCurrency
from src.domain.models.market import RateTable
from src.domain.services.normalization import normalize_currency
from src.utils.decimal_utils import coerce_decimal


def build_rate_table(
    base_currency: str,
    rates: Mapping[str, object],
    timestamp: datetime | None = None,
) -> RateTable:
    """Build a rate table from raw rate values.

    Args:
        base_currency: Currency the rates are anchored to.
        rates: Mapping of currency code to units per 1 base unit.
        timestamp: Optional fetch timestamp.

    Returns:
        RateTable: Table with normalized codes and Decimal rates. Values
        that cannot be parsed are kept as None so lookups raise InvalidRate.
    """
    base = normalize_currency(base_currency)
    normalized: dict[str, Decimal | None] = {}
    for currency, raw in rates.items():
        code = normalize_currency(currency)
        try:
            normalized[code] = None if raw is None else coerce_decimal(raw)
        except (InvalidOperation, ValueError):
            normalized[code] = None
    normalized[base] = Decimal("1")
    return RateTable(base_currency=base, rates=normalized, timestamp=timestamp)


def get_rate(rates: RateTable, currency: str) -> Decimal:
    """Return the units of ``currency`` per 1 base unit.

    Args:
        rates: Rate table anchored to a base currency.
        currency: Currency code to look up.

    Returns:
        Decimal: Strictly positive, finite rate.

    Raises:
        UnsupportedCurrency: The currency is absent from the table.
        InvalidRate: The rate is missing, zero, negative or not finite.
    """
    code = normalize_currency(currency)
    if code == rates.base_currency:
        return Decimal("1")
    if code not in rates.rates:
        raise UnsupportedCurrency(code)
    rate = rates.rates[code]
    if rate is None:
        raise InvalidRate(code, rate)
    try:
        rate = coerce_decimal(rate)
    except (InvalidOperation, ValueError) as exc:
        raise InvalidRate(code, rate) from exc
    if not rate.is_finite() or rate <= 0:
        raise InvalidRate(code, rate)
    return rate


def to_base(amount, currency: str, rates: RateTable) -> Decimal:
    """Convert an amount in ``currency`` into the base currency.

    Args:
        amount: Amount in the source currency.
        currency: Source currency code.
        rates: Rate table anchored to the base currency.

    Returns:
        Decimal: Amount in the base currency.
    """
    value = coerce_decimal(amount)
    return value / get_rate(rates, currency)


def from_base(amount, currency: str, rates: RateTable) -> Decimal:
    """Convert a base-currency amount into ``currency``.

    Args:
        amount: Amount in the base currency.
        currency: Target currency code.
        rates: Rate table anchored to the base currency.

    Returns:
        Decimal: Amount in the target currency.
    """
    value = coerce_decimal(amount)
    return value * get_rate(rates, currency)


def convert_amount(
    amount,
    from_currency: str,
    to_currency: str,
    rates: RateTable,
) -> Decimal:
    """Convert an amount between two currencies through the base currency.

    Args:
        amount: Amount in ``from_currency``.
        from_currency: Source currency code.
        to_currency: Target currency code.
        rates: Rate table anchored to the base currency.

    Returns:
        Decimal: Amount in ``to_currency``. Same-currency conversions return
        the amount unchanged once the currency has been validated.
    """
    if normalize_currency(from_currency) == normalize_currency(to_currency):
        get_rate(rates, from_currency)
        return coerce_decimal(amount)
    return from_base(to_base(amount, from_currency, rates), to_currency, rates)


def validate_rate_table(
    rates: RateTable,
    currencies: Iterable[str],
) -> None:
    """Ensure every currency has a usable rate.

    Args:
        rates: Rate table to check.
        currencies: Currency codes that must be convertible.

    Raises:
        UnsupportedCurrency: A currency is absent from the table.
        InvalidRate: A rate is unusable.
    """
    for currency in currencies:
        get_rate(rates, currency)


__all__ = [
    "build_rate_table",
    "get_rate",
    "to_base",
    "from_base",
    "convert_amount",
    "validate_rate_table",
]
