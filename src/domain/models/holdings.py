"""Domain models for holdings."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class HoldingCategory(str, Enum):
    """Kind of monetary position a holding represents."""

    CASH = "CASH"
    STOCK = "STOCK"
    CREDIT_CARD = "CREDIT_CARD"
    CRYPTO = "CRYPTO"
    OTHER = "OTHER"


class HoldingSection(str, Enum):
    """Grouping of holding categories used for section subtotals."""

    CASH = "CASH"
    CREDIT = "CREDIT"
    INVESTMENT = "INVESTMENT"

    @property
    def categories(self) -> tuple[HoldingCategory, ...]:
        """Return the holding categories belonging to the section."""
        return _SECTION_CATEGORIES[self]


_SECTION_CATEGORIES = {
    HoldingSection.CASH: (HoldingCategory.CASH,),
    HoldingSection.CREDIT: (HoldingCategory.CREDIT_CARD,),
    HoldingSection.INVESTMENT: (
        HoldingCategory.STOCK,
        HoldingCategory.CRYPTO,
        HoldingCategory.OTHER,
    ),
}


@dataclass(frozen=True)
class Holding:
    """A named monetary position.

    Attributes:
        id: Holding identifier.
        name: Display name (bank, card or security name).
        category: Holding category.
        price: Unit price in the native currency (1 for cash-like holdings).
        quantity: Signed quantity; negative for liabilities.
        currency: Native currency code.
        ticker: Optional market ticker for quote refreshes.
        bill_day: Optional billing day (1-31) for credit cards.
        last_updated: Timestamp of the last price refresh.
        change_24h: Percent change from the last price refresh.
    """

    id: str
    name: str
    category: HoldingCategory
    price: Decimal
    quantity: Decimal
    currency: str
    ticker: str | None = None
    bill_day: int | None = None
    last_updated: datetime | None = None
    change_24h: Decimal = field(default=Decimal("0"))

    @property
    def native_value(self) -> Decimal:
        """Return price times quantity in the native currency."""
        return self.price * self.quantity

    @property
    def is_quotable(self) -> bool:
        """Return True when the holding can be refreshed from a quote."""
        return (
            self.category in (HoldingCategory.STOCK, HoldingCategory.CRYPTO)
            and bool(self.ticker)
        )


__all__ = ["HoldingCategory", "HoldingSection", "Holding"]
