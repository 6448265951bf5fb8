"""Domain models for financial aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.models.holdings import HoldingCategory, HoldingSection


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures.

    Attributes:
        asset_total: Sum of positive holding values.
        liability_total: Sum of absolute negative holding values.
        net_worth: Assets minus liabilities.
        currency_code: Currency every figure is expressed in.
    """

    asset_total: Decimal
    liability_total: Decimal
    net_worth: Decimal
    currency_code: str


@dataclass(frozen=True)
class SectionTotal:
    """Subtotal for a section of holdings."""

    section: HoldingSection
    amount: Decimal
    currency_code: str


@dataclass(frozen=True)
class AllocationSlice:
    """Share of the portfolio held in one category."""

    category: HoldingCategory
    amount: Decimal
    percentage: int


@dataclass(frozen=True)
class AllocationBreakdown:
    """Breakdown of absolute holding values by category."""

    currency_code: str
    slices: list[AllocationSlice]

    @property
    def total(self) -> Decimal:
        """Return the sum of every slice amount."""
        return sum((item.amount for item in self.slices), Decimal("0"))


@dataclass(frozen=True)
class DailyExpense:
    """Expense total for a single calendar day."""

    day: date
    amount: Decimal


@dataclass(frozen=True)
class PortfolioValuation:
    """Valuation figures for UI rendering."""

    summary: NetWorthSummary
    sections: list[SectionTotal]
    allocation: AllocationBreakdown


__all__ = [
    "NetWorthSummary",
    "SectionTotal",
    "AllocationSlice",
    "AllocationBreakdown",
    "DailyExpense",
    "PortfolioValuation",
]
