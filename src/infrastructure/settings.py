"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
import os
from typing import Optional

import dotenv

from src.domain.constants import BASE_CURRENCY, DEFAULT_RATES, SUPPORTED_CURRENCIES
from src.domain.services.normalization import normalize_currency
from src.infrastructure.logging.logger import get_app_logger

DEFAULT_QUOTE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings for the finance ledger.

    Attributes:
        base_currency: Currency transactions are stored in.
        supported_currencies: Currencies the rate table must cover.
        display_currency: Currency used for reports and manual entries.
        quote_timeout_seconds: Timeout for each market data request.
        quote_proxy_prefix: Optional prefix prepended to quote URLs.
        user_id: Signed-in user id; None runs as a guest.
        default_rates: Seed rates used until a refresh succeeds.
    """

    base_currency: str = BASE_CURRENCY
    supported_currencies: tuple[str, ...] = SUPPORTED_CURRENCIES
    display_currency: str = BASE_CURRENCY
    quote_timeout_seconds: float = DEFAULT_QUOTE_TIMEOUT_SECONDS
    quote_proxy_prefix: Optional[str] = None
    user_id: Optional[str] = None
    default_rates: dict[str, Decimal] = field(
        default_factory=lambda: dict(DEFAULT_RATES)
    )

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from environment variables and ``.env``.

        Returns:
            AppSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
        logger = get_app_logger()
        base_currency = normalize_currency(
            os.getenv("BASE_CURRENCY", BASE_CURRENCY)
        ) or BASE_CURRENCY
        supported = cls._parse_currencies(
            os.getenv("SUPPORTED_CURRENCIES", ",".join(SUPPORTED_CURRENCIES))
        )
        if base_currency not in supported:
            supported = (base_currency, *supported)
        display_currency = normalize_currency(
            os.getenv("DISPLAY_CURRENCY", base_currency)
        ) or base_currency
        if display_currency not in supported:
            logger.warning(
                f"DISPLAY_CURRENCY {display_currency} is not supported; "
                f"falling back to {base_currency}"
            )
            display_currency = base_currency
        return cls(
            base_currency=base_currency,
            supported_currencies=supported,
            display_currency=display_currency,
            quote_timeout_seconds=cls._parse_timeout(
                os.getenv("QUOTE_TIMEOUT_SECONDS"),
                logger=logger,
            ),
            quote_proxy_prefix=os.getenv("QUOTE_PROXY_PREFIX") or None,
            user_id=(os.getenv("FINANCE_USER_ID") or "").strip() or None,
        )

    @staticmethod
    def _parse_currencies(raw: str) -> tuple[str, ...]:
        codes = []
        for part in raw.split(","):
            code = normalize_currency(part)
            if code and code not in codes:
                codes.append(code)
        return tuple(codes) or SUPPORTED_CURRENCIES

    @staticmethod
    def _parse_timeout(raw: str | None, logger) -> float:
        if not raw:
            return DEFAULT_QUOTE_TIMEOUT_SECONDS
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            logger.warning(f"Invalid QUOTE_TIMEOUT_SECONDS value: {raw}")
            return DEFAULT_QUOTE_TIMEOUT_SECONDS
        if value <= 0:
            logger.warning(f"QUOTE_TIMEOUT_SECONDS must be positive: {raw}")
            return DEFAULT_QUOTE_TIMEOUT_SECONDS
        return float(value)


__all__ = ["AppSettings", "DEFAULT_QUOTE_TIMEOUT_SECONDS"]
