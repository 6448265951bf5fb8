"""Domain services for finance aggregates."""

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from src.domain.constants import DAILY_EXPENSE_WINDOW_DAYS
from src.domain.models import (
    AllocationBreakdown,
    AllocationSlice,
    DailyExpense,
    Holding,
    HoldingCategory,
    HoldingSection,
    NetWorthSummary,
    RateTable,
    SectionTotal,
    Transaction,
    TransactionKind,
)
from src.domain.services.fx import convert_amount
from src.utils.decimal_utils import round_whole


def holding_value(
    holding: Holding,
    rates: RateTable,
    display_currency: str,
) -> Decimal:
    """Return the value of a holding in the display currency.

    Args:
        holding: Holding to value.
        rates: Rate table anchored to the base currency.
        display_currency: Currency to express the value in.

    Returns:
        Decimal: ``price * quantity`` converted from the native currency.
    """
    return convert_amount(
        holding.native_value,
        holding.currency,
        display_currency,
        rates,
    )


def compute_net_worth_summary(
    holdings: Iterable[Holding],
    rates: RateTable,
    display_currency: str,
) -> NetWorthSummary:
    """Compute net worth totals from holdings and rates.

    Liabilities carry a negative quantity, so they subtract naturally.

    Args:
        holdings: Holdings snapshot.
        rates: Rate table anchored to the base currency.
        display_currency: Currency to express the totals in.

    Returns:
        NetWorthSummary: Computed asset, liability, and net worth totals.
    """
    asset_total = Decimal("0")
    liability_total = Decimal("0")
    for holding in holdings:
        converted = holding_value(holding, rates, display_currency)
        if converted >= 0:
            asset_total += converted
        else:
            liability_total += abs(converted)

    return NetWorthSummary(
        asset_total=asset_total,
        liability_total=liability_total,
        net_worth=asset_total - liability_total,
        currency_code=display_currency,
    )


def compute_section_total(
    holdings: Iterable[Holding],
    rates: RateTable,
    display_currency: str,
    categories: Iterable[HoldingCategory],
) -> Decimal:
    """Sum holding values restricted to some categories.

    Args:
        holdings: Holdings snapshot.
        rates: Rate table anchored to the base currency.
        display_currency: Currency to express the total in.
        categories: Holding categories included in the subtotal.

    Returns:
        Decimal: Signed subtotal in the display currency.
    """
    selected = set(categories)
    return sum(
        (
            holding_value(holding, rates, display_currency)
            for holding in holdings
            if holding.category in selected
        ),
        Decimal("0"),
    )


def compute_section_totals(
    holdings: Iterable[Holding],
    rates: RateTable,
    display_currency: str,
) -> list[SectionTotal]:
    """Return one subtotal per holding section."""
    snapshot = list(holdings)
    return [
        SectionTotal(
            section=section,
            amount=compute_section_total(
                snapshot,
                rates,
                display_currency,
                section.categories,
            ),
            currency_code=display_currency,
        )
        for section in HoldingSection
    ]


def compute_allocation_breakdown(
    holdings: Iterable[Holding],
    rates: RateTable,
    display_currency: str,
) -> AllocationBreakdown:
    """Compute the allocation of absolute values by holding category.

    Args:
        holdings: Holdings snapshot.
        rates: Rate table anchored to the base currency.
        display_currency: Currency to express the amounts in.

    Returns:
        AllocationBreakdown: Non-zero categories with whole percentages of
        the total. Every percentage is zero when the total is zero.
    """
    totals: dict[HoldingCategory, Decimal] = {}
    for holding in holdings:
        converted = abs(holding_value(holding, rates, display_currency))
        totals[holding.category] = (
            totals.get(holding.category, Decimal("0")) + converted
        )

    grand_total = sum(totals.values(), Decimal("0"))
    slices = []
    for category in HoldingCategory:
        amount = totals.get(category, Decimal("0"))
        if amount == 0:
            continue
        slices.append(
            AllocationSlice(
                category=category,
                amount=amount,
                percentage=_percentage(amount, grand_total),
            )
        )
    return AllocationBreakdown(currency_code=display_currency, slices=slices)


def summarize_daily_expenses(
    transactions: Iterable[Transaction],
    today: date,
    days: int = DAILY_EXPENSE_WINDOW_DAYS,
) -> list[DailyExpense]:
    """Sum expenses per calendar day over a trailing window.

    Args:
        transactions: Ledger history.
        today: Last day of the window.
        days: Window length in days.

    Returns:
        list[DailyExpense]: One entry per day, oldest first, with amounts in
        the base currency rounded to whole units.
    """
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    totals = {day: Decimal("0") for day in window}
    for transaction in transactions:
        if transaction.kind != TransactionKind.EXPENSE:
            continue
        day = transaction.timestamp.date()
        if day in totals:
            totals[day] += transaction.amount
    return [
        DailyExpense(day=day, amount=round_whole(totals[day]))
        for day in window
    ]


def _percentage(amount: Decimal, total: Decimal) -> int:
    if total == 0:
        return 0
    ratio = amount / total * Decimal("100")
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


__all__ = [
    "holding_value",
    "compute_net_worth_summary",
    "compute_section_total",
    "compute_section_totals",
    "compute_allocation_breakdown",
    "summarize_daily_expenses",
]
