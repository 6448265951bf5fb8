"""Domain models for exchange rates and market quotes."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class MarketHint(str, Enum):
    """Market a ticker is quoted on."""

    DOMESTIC = "domestic"
    FOREIGN = "foreign"
    CRYPTO = "crypto"


@dataclass(frozen=True)
class RateTable:
    """Exchange rates anchored to a base currency.

    Attributes:
        base_currency: Currency every rate is expressed against.
        rates: Units of each currency per 1 unit of the base currency.
        timestamp: When the rates were fetched, if known.
    """

    base_currency: str
    rates: dict[str, Decimal | None] = field(default_factory=dict)
    timestamp: datetime | None = None

    @property
    def currencies(self) -> tuple[str, ...]:
        """Return every currency the table can convert."""
        codes = set(self.rates) | {self.base_currency}
        return tuple(sorted(codes))


@dataclass(frozen=True)
class Quote:
    """Latest market quote for a ticker."""

    symbol: str
    price: Decimal
    currency: str
    timestamp: datetime


__all__ = ["MarketHint", "RateTable", "Quote"]
