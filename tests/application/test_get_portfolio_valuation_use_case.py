"""Tests for the GetPortfolioValuationUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.get_portfolio_valuation import (
    GetPortfolioValuationUseCase,
)
from src.domain.errors import UnsupportedCurrency
from src.domain.models import Holding, HoldingCategory, HoldingSection
from src.domain.services.fx import build_rate_table


def _holding(holding_id, category, quantity, currency="TWD", price="1"):
    return Holding(
        id=holding_id,
        name=holding_id,
        category=category,
        price=Decimal(price),
        quantity=Decimal(quantity),
        currency=currency,
    )


def test_execute_returns_summary_sections_and_allocation() -> None:
    """All figures are expressed in the display currency."""
    holdings = [
        _holding("bank", HoldingCategory.CASH, "100000"),
        _holding("card", HoldingCategory.CREDIT_CARD, "-20000"),
    ]
    rates = build_rate_table("TWD", {"USD": "0.03", "JPY": "4.7"})

    valuation = GetPortfolioValuationUseCase(logger=MagicMock()).execute(
        holdings,
        rates,
        "usd",
    )

    assert valuation.summary.net_worth == Decimal("2400")
    assert valuation.summary.currency_code == "USD"
    sections = {s.section: s.amount for s in valuation.sections}
    assert sections[HoldingSection.CASH] == Decimal("3000")
    assert sections[HoldingSection.CREDIT] == Decimal("-600")
    assert sum(s.percentage for s in valuation.allocation.slices) == 100


def test_execute_rejects_unknown_display_currency() -> None:
    """Conversions to a currency without a rate fail fast."""
    rates = build_rate_table("TWD", {"USD": "0.03"})

    with pytest.raises(UnsupportedCurrency):
        GetPortfolioValuationUseCase(logger=MagicMock()).execute(
            [_holding("bank", HoldingCategory.CASH, "1")],
            rates,
            "EUR",
        )
