"""Tests for the RecordTransactionUseCase."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from src.domain.constants import DEFAULT_CATEGORIES
from src.domain.errors import UnknownEntity
from src.domain.models import (
    Authenticated,
    Guest,
    Holding,
    HoldingCategory,
    PortfolioSnapshot,
    TransactionKind,
)
from src.domain.services.fx import build_rate_table

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _rates():
    return build_rate_table("TWD", {"USD": "0.03"})


def _snapshot() -> PortfolioSnapshot:
    return PortfolioSnapshot(
        holdings=(
            Holding(
                id="bank",
                name="Bank",
                category=HoldingCategory.CASH,
                price=Decimal("1"),
                quantity=Decimal("10000"),
                currency="TWD",
            ),
            Holding(
                id="card",
                name="Card",
                category=HoldingCategory.CREDIT_CARD,
                price=Decimal("1"),
                quantity=Decimal("-500"),
                currency="TWD",
                bill_day=20,
            ),
        ),
        categories=DEFAULT_CATEGORIES,
    )


def _use_case(repository=None):
    return RecordTransactionUseCase(
        repository=repository,
        logger=MagicMock(),
        id_factory=lambda: "tx-1",
    )


def test_add_converts_display_amount_to_base_and_debits_holding() -> None:
    """An amount typed in USD is stored in TWD."""
    use_case = _use_case()

    updated = use_case.add(
        Guest(),
        _snapshot(),
        _rates(),
        kind=TransactionKind.EXPENSE,
        amount=Decimal("3"),
        display_currency="USD",
        category="餐飲",
        note="午餐",
        holding_id="bank",
        timestamp=NOW,
    )

    transaction = updated.transactions[0]
    assert transaction.amount == Decimal("100")
    assert transaction.holding_name == "Bank"
    assert updated.find_holding("bank").quantity == Decimal("9900")


def test_add_persists_for_authenticated_user() -> None:
    """The transaction and the updated holdings are stored."""
    repository = MagicMock()
    use_case = _use_case(repository)

    updated = use_case.add(
        Authenticated(user_id="u1"),
        _snapshot(),
        _rates(),
        kind=TransactionKind.INCOME,
        amount=Decimal("500"),
        display_currency="TWD",
        category="薪資",
        holding_id="bank",
    )

    repository.save_transactions.assert_called_once_with(
        "u1",
        [updated.transactions[0]],
    )
    repository.save_holdings.assert_called_once_with("u1", updated.holdings)


def test_add_rejects_unknown_holding() -> None:
    """Linking a missing holding is an error for manual entries."""
    with pytest.raises(UnknownEntity):
        _use_case().add(
            Guest(),
            _snapshot(),
            _rates(),
            kind=TransactionKind.EXPENSE,
            amount=Decimal("1"),
            display_currency="TWD",
            category="其他",
            holding_id="nope",
        )


def test_update_rebases_linked_holding() -> None:
    """Changing amount and holding moves the effect exactly."""
    use_case = _use_case()
    snapshot = use_case.add(
        Guest(),
        _snapshot(),
        _rates(),
        kind=TransactionKind.EXPENSE,
        amount=Decimal("200"),
        display_currency="TWD",
        category="購物",
        holding_id="bank",
    )

    updated = use_case.update(
        Guest(),
        snapshot,
        _rates(),
        "tx-1",
        display_currency="TWD",
        amount=Decimal("300"),
        holding_id="card",
    )

    assert updated.find_holding("bank").quantity == Decimal("10000")
    assert updated.find_holding("card").quantity == Decimal("-800")
    assert updated.find_transaction("tx-1").amount == Decimal("300")
    assert updated.find_transaction("tx-1").holding_name == "Card"


def test_delete_reverses_effect_and_removes_transaction() -> None:
    """Deleting restores the holding balance."""
    repository = MagicMock()
    use_case = _use_case(repository)
    identity = Authenticated(user_id="u1")
    snapshot = use_case.add(
        identity,
        _snapshot(),
        _rates(),
        kind=TransactionKind.EXPENSE,
        amount=Decimal("250"),
        display_currency="TWD",
        category="交通",
        holding_id="bank",
    )

    updated = use_case.delete(identity, snapshot, _rates(), "tx-1")

    assert updated.transactions == ()
    assert updated.find_holding("bank").quantity == Decimal("10000")
    repository.delete_transaction.assert_called_once_with("u1", "tx-1")


def test_update_and_delete_reject_unknown_transactions() -> None:
    """Unknown transaction ids raise UnknownEntity."""
    use_case = _use_case()

    with pytest.raises(UnknownEntity):
        use_case.update(
            Guest(),
            _snapshot(),
            _rates(),
            "missing",
            display_currency="TWD",
            note="x",
        )
    with pytest.raises(UnknownEntity):
        use_case.delete(Guest(), _snapshot(), _rates(), "missing")


def test_parse_uses_snapshot_categories() -> None:
    """Quick entries are classified with the snapshot categories."""
    entry = _use_case().parse(_snapshot(), "電影 320")

    assert entry.category == "娛樂"
    assert entry.amount == Decimal("320")
