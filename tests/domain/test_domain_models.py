"""Tests for domain models and validation helpers."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.constants import DEFAULT_CATEGORIES
from src.domain.models import (
    Authenticated,
    Automation,
    AutomationKind,
    CategoryColor,
    CategoryIcon,
    Guest,
    Holding,
    HoldingCategory,
    LogStatus,
    PortfolioSnapshot,
    SimulationResult,
    SystemLog,
    Transaction,
    TransactionKind,
    identity_from_user_id,
)
from src.domain.services.validation import validate_holding

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _holding(category=HoldingCategory.CASH, quantity="10", **kwargs):
    values = {
        "id": "h1",
        "name": "Holding",
        "category": category,
        "price": Decimal("1"),
        "quantity": Decimal(quantity),
        "currency": "TWD",
    }
    values.update(kwargs)
    return Holding(**values)


def _log(log_id, status=LogStatus.SUCCESS):
    return SystemLog(
        id=log_id,
        timestamp=NOW,
        title="t",
        description="d",
        status=status,
    )


def test_transaction_rejects_negative_amount() -> None:
    """Direction is carried by kind, never by sign."""
    with pytest.raises(ValueError):
        Transaction(
            id="t",
            kind=TransactionKind.EXPENSE,
            timestamp=NOW,
            amount=Decimal("-1"),
            category="x",
        )


def test_automation_validates_amount_and_day() -> None:
    """Budgets are non-negative and trigger days stay within 1-31."""
    with pytest.raises(ValueError):
        Automation(
            id="a",
            name="a",
            kind=AutomationKind.RECURRING,
            amount=Decimal("-1"),
        )
    with pytest.raises(ValueError):
        Automation(
            id="a",
            name="a",
            kind=AutomationKind.RECURRING,
            amount=Decimal("1"),
            day_of_month=32,
        )


def test_category_enums_fall_back_to_unknown() -> None:
    """Unknown stored keys resolve to a typed UNKNOWN member."""
    assert CategoryIcon.from_key("Film") == CategoryIcon.FILM
    assert CategoryIcon.from_key("Rocket") == CategoryIcon.UNKNOWN
    assert CategoryColor.from_key(None) == CategoryColor.UNKNOWN


def test_default_categories_are_labelled_and_keyworded() -> None:
    """Seven default categories ship with the fallback label present."""
    labels = [category.label for category in DEFAULT_CATEGORIES]

    assert labels == ["餐飲", "娛樂", "交通", "購物", "帳單", "其他", "薪資"]
    assert "午餐" in DEFAULT_CATEGORIES[0].keywords


def test_identity_from_user_id() -> None:
    """Blank ids are guests."""
    assert identity_from_user_id("  ") == Guest()
    assert identity_from_user_id(None) == Guest()
    assert identity_from_user_id(" u1 ") == Authenticated(user_id="u1")


def test_apply_simulation_prepends_history() -> None:
    """New transactions and logs come before existing ones."""
    old_log = _log("old")
    snapshot = PortfolioSnapshot(holdings=(_holding(),), logs=(old_log,))
    new_holding = _holding(quantity="5")
    result = SimulationResult(
        holdings=(new_holding,),
        transactions=(),
        logs=(_log("n1"), _log("n2", LogStatus.FAILED)),
    )

    updated = snapshot.apply_simulation(result)

    assert updated.holdings == (new_holding,)
    assert [log.id for log in updated.logs] == ["n1", "n2", "old"]
    assert result.count(LogStatus.FAILED) == 1
    assert snapshot.logs == (old_log,)


def test_validate_holding_rejects_missing_currency_and_bad_bill_day() -> None:
    """Malformed holdings raise ValueError."""
    logger = MagicMock()

    with pytest.raises(ValueError):
        validate_holding(_holding(currency=""), logger)
    with pytest.raises(ValueError):
        validate_holding(
            _holding(
                category=HoldingCategory.CREDIT_CARD,
                quantity="-1",
                bill_day=0,
            ),
            logger,
        )


def test_validate_holding_warns_on_sign_conventions() -> None:
    """Positive card balances and negative assets are suspicious."""
    logger = MagicMock()

    validate_holding(
        _holding(category=HoldingCategory.CREDIT_CARD, quantity="5"),
        logger,
    )
    validate_holding(_holding(quantity="-5"), logger)
    validate_holding(_holding(bill_day=15), logger)

    assert logger.warning.call_count == 3


def test_validate_holding_accepts_regular_card() -> None:
    """A card with debt and a billing day passes silently."""
    logger = MagicMock()

    validate_holding(
        _holding(
            category=HoldingCategory.CREDIT_CARD,
            quantity="-2000",
            bill_day=25,
        ),
        logger,
    )

    logger.warning.assert_not_called()
