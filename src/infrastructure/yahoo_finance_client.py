"""Yahoo Finance chart API client for quotes and exchange rates."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional
from urllib.parse import quote

import httpx

from src.application.ports.quote_provider import QuoteProviderPort
from src.application.ports.rate_provider import RateProviderPort
from src.domain.constants import SUPPORTED_CURRENCIES
from src.domain.models import MarketHint, Quote, RateTable
from src.domain.services.market import rates_from_usd_quotes
from src.domain.services.normalization import (
    normalize_currency,
    normalize_ticker,
    otc_fallback_symbol,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import DEFAULT_QUOTE_TIMEOUT_SECONDS
from src.utils.decimal_utils import coerce_decimal

YAHOO_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/"
CHART_QUERY = "interval=1d&range=1d"
USD = "USD"


class YahooFinanceClient(QuoteProviderPort, RateProviderPort):
    """Quote and rate provider backed by the Yahoo chart endpoint.

    Every failure (transport error, bad status, malformed payload or a
    missing price) is logged and reported as None so callers keep their
    cached values.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_QUOTE_TIMEOUT_SECONDS,
        proxy_prefix: Optional[str] = None,
        currencies: Iterable[str] = SUPPORTED_CURRENCIES,
        logger=None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Seconds allowed for each request.
            proxy_prefix: Optional prefix; the full chart URL is appended
                URL-encoded (CORS proxy style).
            currencies: Currencies the rate table must cover.
            logger: Optional logger compatible with logging.Logger-like API.
            transport: Optional httpx transport, used to stub the network.
        """
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._proxy_prefix = proxy_prefix
        self._currencies = tuple(
            normalize_currency(currency) for currency in currencies
        )
        self._logger = logger or get_app_logger()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def fetch_quote(self, ticker: str, market: MarketHint) -> Quote | None:
        """Return the latest quote for a user ticker.

        Domestic tickers without a listed price are retried on the OTC
        board.

        Args:
            ticker: Raw ticker typed by the user.
            market: Market the ticker is quoted on.

        Returns:
            Quote | None: Latest quote, or None when unavailable.
        """
        symbol = normalize_ticker(ticker, market)
        result = self._fetch_chart(symbol)
        if result is None and market == MarketHint.DOMESTIC:
            otc_symbol = otc_fallback_symbol(symbol)
            if otc_symbol:
                self._logger.info(f"Retrying with OTC ticker: {otc_symbol}")
                result = self._fetch_chart(otc_symbol)
        return result

    def fetch_rates(self, base_currency: str) -> RateTable | None:
        """Return rates anchored to ``base_currency``.

        Each non-USD currency is fetched as its ``<CCY>=X`` pair (price of
        one USD) and the table is re-anchored onto the base currency.

        Args:
            base_currency: Currency the table is anchored to.

        Returns:
            RateTable | None: Fresh rates, or None if any pair is missing.
        """
        base = normalize_currency(base_currency)
        currencies = dict.fromkeys((base, *self._currencies))
        usd_quotes: dict[str, Quote] = {}
        for currency in currencies:
            if currency == USD:
                continue
            pair = self._fetch_chart(f"{currency}=X")
            if pair is None:
                self._logger.warning(
                    f"Incomplete exchange rate data received: {currency}"
                )
                return None
            usd_quotes[currency] = pair
        if base == USD:
            usd_quotes[USD] = Quote(
                symbol=USD,
                price=Decimal("1"),
                currency=USD,
                timestamp=max(
                    (q.timestamp for q in usd_quotes.values()),
                    default=datetime.now(timezone.utc),
                ),
            )
        rates = rates_from_usd_quotes(base, usd_quotes)
        self._logger.info(
            f"Exchange rates refreshed: base={base}, "
            f"currencies={','.join(rates.currencies)}"
        )
        return rates

    def _chart_url(self, symbol: str) -> str:
        target = f"{YAHOO_CHART_URL}{quote(symbol)}?{CHART_QUERY}"
        if self._proxy_prefix:
            return f"{self._proxy_prefix}{quote(target, safe='')}"
        return target

    def _fetch_chart(self, symbol: str) -> Quote | None:
        try:
            response = self._client.get(self._chart_url(symbol))
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            self._logger.warning(f"Failed to fetch chart for {symbol}: {exc}")
            return None
        return self._parse_chart(symbol, payload)

    def _parse_chart(self, symbol: str, payload) -> Quote | None:
        try:
            meta = payload["chart"]["result"][0]["meta"]
        except (KeyError, IndexError, TypeError):
            self._logger.warning(f"No chart result for {symbol}")
            return None

        raw_price = meta.get("regularMarketPrice")
        try:
            price = coerce_decimal(raw_price) if raw_price else Decimal("0")
        except (InvalidOperation, ValueError):
            price = Decimal("0")
        if not price.is_finite() or price <= 0:
            self._logger.warning(f"No market price for {symbol}")
            return None

        market_time = meta.get("regularMarketTime")
        timestamp = (
            datetime.fromtimestamp(market_time, tz=timezone.utc)
            if market_time
            else datetime.now(timezone.utc)
        )
        return Quote(
            symbol=meta.get("symbol") or symbol,
            price=price,
            currency=normalize_currency(meta.get("currency")),
            timestamp=timestamp,
        )


__all__ = ["YahooFinanceClient", "YAHOO_CHART_URL"]
