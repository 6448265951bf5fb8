"""Domain normalization helpers."""

from src.domain.models.holdings import Holding, HoldingCategory
from src.domain.models.market import MarketHint

DOMESTIC_SUFFIX = ".TW"
OTC_SUFFIX = ".TWO"
CRYPTO_QUOTE_SUFFIX = "-USD"


def normalize_currency(currency: str | None) -> str:
    """Normalize currency codes.

    Args:
        currency: Raw currency code from a caller or repository.

    Returns:
        str: Upper-cased, stripped code (empty string when missing).
    """
    if not currency:
        return ""
    return currency.strip().upper()


def normalize_ticker(ticker: str, market: MarketHint) -> str:
    """Normalize a user ticker into a quote symbol.

    Args:
        ticker: Raw ticker typed by the user (e.g. 2330, btc, AAPL).
        market: Market the ticker is quoted on.

    Returns:
        str: Symbol understood by the quote provider.
    """
    symbol = ticker.strip().upper()
    if market == MarketHint.DOMESTIC:
        if not symbol.endswith(DOMESTIC_SUFFIX) and not symbol.endswith(
            OTC_SUFFIX
        ):
            symbol = f"{symbol}{DOMESTIC_SUFFIX}"
    elif market == MarketHint.CRYPTO:
        if "-" not in symbol and not symbol.endswith("USD"):
            symbol = f"{symbol}{CRYPTO_QUOTE_SUFFIX}"
    return symbol


def otc_fallback_symbol(symbol: str) -> str | None:
    """Return the OTC variant of a domestic listed symbol, if any.

    Args:
        symbol: Normalized domestic symbol.

    Returns:
        str | None: ``.TWO`` symbol for a ``.TW`` symbol, otherwise None.
    """
    if symbol.endswith(DOMESTIC_SUFFIX):
        return symbol[: -len(DOMESTIC_SUFFIX)] + OTC_SUFFIX
    return None


def resolve_market(holding: Holding, base_currency: str) -> MarketHint:
    """Infer the market hint for a holding.

    Args:
        holding: Holding to refresh.
        base_currency: Base currency; securities priced in it are domestic.

    Returns:
        MarketHint: Market used to normalize the holding ticker.
    """
    if holding.category == HoldingCategory.CRYPTO:
        return MarketHint.CRYPTO
    if normalize_currency(holding.currency) == normalize_currency(
        base_currency
    ):
        return MarketHint.DOMESTIC
    return MarketHint.FOREIGN


__all__ = [
    "normalize_currency",
    "normalize_ticker",
    "otc_fallback_symbol",
    "resolve_market",
]
