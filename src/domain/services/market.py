"""Domain services for market quotes and rate derivation."""

from dataclasses import replace
from decimal import Decimal

from src.domain.errors import ConversionError
from src.domain.models import Holding, Quote, RateTable
from src.domain.services.fx import build_rate_table, convert_amount
from src.domain.services.normalization import normalize_currency


def apply_quote(
    holding: Holding,
    quote: Quote,
    rates: RateTable | None = None,
) -> Holding:
    """Return a holding repriced from a fresh quote.

    A quote in another currency than the holding (crypto pairs are always
    quoted in USD) is converted into the holding currency first.
    ``change_24h`` is the percentage move from the cached price. A zero
    cached price yields a zero change.

    Args:
        holding: Holding to reprice.
        quote: Latest quote for the holding ticker.
        rates: Rate table used when the quote currency differs.

    Returns:
        Holding: Holding with the new price, change and update time.

    Raises:
        ConversionError: The quote currency differs and cannot be
            converted with ``rates``.
    """
    price = quote.price
    quote_currency = normalize_currency(quote.currency)
    holding_currency = normalize_currency(holding.currency)
    if quote_currency and quote_currency != holding_currency:
        if rates is None:
            raise ConversionError(
                f"No rates to convert {quote_currency} quote into "
                f"{holding_currency}"
            )
        price = convert_amount(price, quote_currency, holding_currency, rates)

    change = Decimal("0")
    if holding.price:
        change = (price - holding.price) / holding.price * Decimal("100")
    return replace(
        holding,
        price=price,
        change_24h=change,
        last_updated=quote.timestamp,
    )


def rates_from_usd_quotes(
    base_currency: str,
    usd_quotes: dict[str, Quote],
) -> RateTable:
    """Re-anchor USD based currency quotes onto the base currency.

    Each quote is the price of one USD in the keyed currency (``TWD=X``
    style pairs).

    Args:
        base_currency: Currency the table is anchored to; must be quoted.
        usd_quotes: Mapping of currency code to its USD pair quote.

    Returns:
        RateTable: Units of each currency per 1 base unit, USD included,
        stamped with the latest quote time.

    Raises:
        KeyError: The base currency pair was not quoted.
    """
    base_quote = usd_quotes[base_currency]
    rates: dict[str, Decimal] = {"USD": Decimal("1") / base_quote.price}
    for currency, quote in usd_quotes.items():
        if currency == base_currency:
            continue
        rates[currency] = quote.price / base_quote.price
    timestamp = max(quote.timestamp for quote in usd_quotes.values())
    return build_rate_table(base_currency, rates, timestamp=timestamp)


__all__ = ["apply_quote", "rates_from_usd_quotes"]
