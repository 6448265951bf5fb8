"""Domain services applying ledger transactions to holding balances.

A transaction amount is stored in the base currency. Applying it converts
that amount into the holding's native currency and adds it (INCOME) or
subtracts it (EXPENSE) from the quantity. Reversals re-derive the delta
from the stored amount rather than from a cached value.
"""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from src.domain.models import Holding, RateTable, Transaction, TransactionKind
from src.domain.services.fx import from_base


def ledger_delta(
    holding: Holding,
    kind: TransactionKind,
    amount_base,
    rates: RateTable,
) -> Decimal:
    """Return the signed quantity change a transaction causes.

    Args:
        holding: Holding the transaction is linked to.
        kind: INCOME or EXPENSE.
        amount_base: Transaction amount in the base currency.
        rates: Rate table anchored to the base currency.

    Returns:
        Decimal: Positive for income, negative for expense, expressed in
        the holding's native currency.
    """
    delta = from_base(amount_base, holding.currency, rates)
    if kind == TransactionKind.INCOME:
        return delta
    return -delta


def apply_transaction(
    holding: Holding,
    kind: TransactionKind,
    amount_base,
    rates: RateTable,
) -> Holding:
    """Return the holding after a transaction of ``kind`` is applied."""
    delta = ledger_delta(holding, kind, amount_base, rates)
    return replace(holding, quantity=holding.quantity + delta)


def reverse_transaction(
    holding: Holding,
    transaction: Transaction,
    rates: RateTable,
) -> Holding:
    """Return the holding with a transaction's effect undone."""
    delta = ledger_delta(holding, transaction.kind, transaction.amount, rates)
    return replace(holding, quantity=holding.quantity - delta)


def apply_to_holdings(
    holdings: Iterable[Holding],
    transaction: Transaction,
    rates: RateTable,
) -> tuple[Holding, ...]:
    """Apply a transaction to the holding it references.

    Args:
        holdings: Holdings snapshot.
        transaction: Transaction to apply.
        rates: Rate table anchored to the base currency.

    Returns:
        tuple[Holding, ...]: New snapshot. Unlinked transactions, or links
        to holdings no longer present, leave every holding unchanged.
    """
    return tuple(
        apply_transaction(holding, transaction.kind, transaction.amount, rates)
        if holding.id == transaction.holding_id
        else holding
        for holding in holdings
    )


def reverse_on_holdings(
    holdings: Iterable[Holding],
    transaction: Transaction,
    rates: RateTable,
) -> tuple[Holding, ...]:
    """Undo a transaction on the holding it references."""
    return tuple(
        reverse_transaction(holding, transaction, rates)
        if holding.id == transaction.holding_id
        else holding
        for holding in holdings
    )


def rebase_transaction(
    holdings: Iterable[Holding],
    old: Transaction,
    new: Transaction,
    rates: RateTable,
) -> tuple[Holding, ...]:
    """Replace the effect of ``old`` with the effect of ``new``.

    The old effect is reversed first, then the new one applied, so edits
    that change the amount, the kind or the linked holding stay exact.
    """
    reverted = reverse_on_holdings(holdings, old, rates)
    return apply_to_holdings(reverted, new, rates)


__all__ = [
    "ledger_delta",
    "apply_transaction",
    "reverse_transaction",
    "apply_to_holdings",
    "reverse_on_holdings",
    "rebase_transaction",
]
