"""Use case to add, edit and delete ledger transactions.

Amounts entered by the user are in the display currency and are stored in
the base currency. Every change keeps the linked holding balance in sync:
edits reverse the old effect before applying the new one.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.errors import UnknownEntity
from src.domain.models import (
    Authenticated,
    Identity,
    PortfolioSnapshot,
    QuickEntry,
    RateTable,
    Transaction,
    TransactionKind,
)
from src.domain.services.categorization import parse_quick_entry
from src.domain.services.fx import to_base
from src.domain.services.ledger import (
    apply_to_holdings,
    rebase_transaction,
    reverse_on_holdings,
)
from src.infrastructure.logging.logger import get_app_logger


class RecordTransactionUseCase:
    """Record manual transactions against a portfolio snapshot."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort | None = None,
        logger=None,
        id_factory=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Persistence port; only needed for signed-in users.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional callable producing transaction ids.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex[:12])

    def parse(
        self,
        snapshot: PortfolioSnapshot,
        text: str,
    ) -> QuickEntry | None:
        """Parse a quick entry against the snapshot categories."""
        return parse_quick_entry(text, snapshot.categories)

    def add(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        rates: RateTable,
        *,
        kind: TransactionKind,
        amount,
        display_currency: str,
        category: str,
        note: str = "",
        holding_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> PortfolioSnapshot:
        """Record a new transaction.

        Args:
            identity: Signed-in user or guest.
            snapshot: Current portfolio state.
            rates: Rate table anchored to the base currency.
            kind: INCOME or EXPENSE.
            amount: Amount in the display currency.
            display_currency: Currency the amount was entered in.
            category: Category label.
            note: Free-text note.
            holding_id: Optional holding to credit or debit.
            timestamp: Optional event time; defaults to now.

        Returns:
            PortfolioSnapshot: Snapshot with the transaction prepended.

        Raises:
            UnknownEntity: ``holding_id`` does not exist.
            UnsupportedCurrency: The display currency has no rate.
        """
        holding = self._linked_holding(snapshot, holding_id)
        transaction = Transaction(
            id=self._id_factory(),
            kind=kind,
            timestamp=timestamp or datetime.now(timezone.utc),
            amount=to_base(amount, display_currency, rates),
            category=category,
            note=note,
            holding_id=holding.id if holding else None,
            holding_name=holding.name if holding else None,
        )
        holdings = apply_to_holdings(snapshot.holdings, transaction, rates)
        updated = replace(
            snapshot,
            holdings=holdings,
            transactions=(transaction,) + snapshot.transactions,
        )
        self._logger.info(
            f"Transaction added: id={transaction.id}, kind={kind.value}, "
            f"amount={transaction.amount}, holding={transaction.holding_id}"
        )
        self._persist(identity, updated, transaction)
        return updated

    def update(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        rates: RateTable,
        transaction_id: str,
        *,
        display_currency: str,
        amount=None,
        kind: TransactionKind | None = None,
        category: str | None = None,
        note: str | None = None,
        holding_id: str | None = None,
    ) -> PortfolioSnapshot:
        """Edit a transaction and re-derive its holding effect.

        Fields left as None are unchanged.

        Args:
            identity: Signed-in user or guest.
            snapshot: Current portfolio state.
            rates: Rate table anchored to the base currency.
            transaction_id: Transaction to edit.
            display_currency: Currency ``amount`` is expressed in.
            amount: New amount in the display currency.
            kind: New direction.
            category: New category label.
            note: New note.
            holding_id: New linked holding.

        Returns:
            PortfolioSnapshot: Snapshot with the edited transaction.

        Raises:
            UnknownEntity: The transaction or the new holding does not exist.
        """
        old = snapshot.find_transaction(transaction_id)
        if old is None:
            raise UnknownEntity("transaction", transaction_id)

        changes: dict = {}
        if amount is not None:
            changes["amount"] = to_base(amount, display_currency, rates)
        if kind is not None:
            changes["kind"] = kind
        if category is not None:
            changes["category"] = category
        if note is not None:
            changes["note"] = note
        if holding_id is not None:
            holding = self._linked_holding(snapshot, holding_id)
            changes["holding_id"] = holding.id
            changes["holding_name"] = holding.name
        new = replace(old, **changes)

        holdings = rebase_transaction(snapshot.holdings, old, new, rates)
        updated = replace(
            snapshot,
            holdings=holdings,
            transactions=tuple(
                new if t.id == transaction_id else t
                for t in snapshot.transactions
            ),
        )
        self._logger.info(
            f"Transaction updated: id={transaction_id}, "
            f"amount={old.amount}->{new.amount}"
        )
        self._persist(identity, updated, new)
        return updated

    def delete(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        rates: RateTable,
        transaction_id: str,
    ) -> PortfolioSnapshot:
        """Delete a transaction and reverse its holding effect.

        Raises:
            UnknownEntity: The transaction does not exist.
        """
        transaction = snapshot.find_transaction(transaction_id)
        if transaction is None:
            raise UnknownEntity("transaction", transaction_id)

        holdings = reverse_on_holdings(snapshot.holdings, transaction, rates)
        updated = replace(
            snapshot,
            holdings=holdings,
            transactions=tuple(
                t for t in snapshot.transactions if t.id != transaction_id
            ),
        )
        self._logger.info(f"Transaction deleted: id={transaction_id}")
        if isinstance(identity, Authenticated) and self._repository is not None:
            self._repository.delete_transaction(identity.user_id, transaction_id)
            self._repository.save_holdings(identity.user_id, updated.holdings)
        return updated

    @staticmethod
    def _linked_holding(snapshot: PortfolioSnapshot, holding_id: str | None):
        if holding_id is None:
            return None
        holding = snapshot.find_holding(holding_id)
        if holding is None:
            raise UnknownEntity("holding", holding_id)
        return holding

    def _persist(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        transaction: Transaction,
    ) -> None:
        if not isinstance(identity, Authenticated) or self._repository is None:
            return
        self._repository.save_transactions(identity.user_id, [transaction])
        self._repository.save_holdings(identity.user_id, snapshot.holdings)


__all__ = ["RecordTransactionUseCase"]
