"""Port for fetching market quotes."""

from typing import Protocol

from src.domain.models import MarketHint, Quote


class QuoteProviderPort(Protocol):
    """Port exposing latest prices for tickers."""

    def fetch_quote(self, ticker: str, market: MarketHint) -> Quote | None:
        """Return the latest quote, or None when no price is available."""


__all__ = ["QuoteProviderPort"]
