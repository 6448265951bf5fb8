"""Tests for the RunAutomationsUseCase."""

from datetime import datetime, timezone
from decimal import Decimal
from itertools import count
from unittest.mock import MagicMock

from src.application.use_cases.run_automations import RunAutomationsUseCase
from src.domain.models import (
    Authenticated,
    Automation,
    AutomationKind,
    Guest,
    Holding,
    HoldingCategory,
    LogStatus,
    PortfolioSnapshot,
    SystemLog,
)
from src.domain.services.fx import build_rate_table

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _snapshot() -> PortfolioSnapshot:
    bank = Holding(
        id="bank",
        name="Bank",
        category=HoldingCategory.CASH,
        price=Decimal("1"),
        quantity=Decimal("50000"),
        currency="TWD",
    )
    rules = (
        Automation(
            id="rent",
            name="Rent",
            kind=AutomationKind.RECURRING,
            amount=Decimal("3000"),
            target_holding_id="bank",
        ),
        Automation(
            id="broken",
            name="Broken",
            kind=AutomationKind.RECURRING,
            amount=Decimal("10"),
            target_holding_id="gone",
        ),
    )
    old_log = SystemLog(
        id="old",
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
        title="Executed: Rent",
        description="previous run",
        status=LogStatus.SUCCESS,
    )
    return PortfolioSnapshot(holdings=(bank,), automations=rules, logs=(old_log,))


def _use_case(repository=None):
    counter = count(1)
    return RunAutomationsUseCase(
        repository=repository,
        logger=MagicMock(),
        audit_logger=MagicMock(),
        id_factory=lambda: f"id-{next(counter)}",
    )


def test_execute_persists_results_for_authenticated_user() -> None:
    """Holdings, new transactions and new logs are stored after the pass."""
    repository = MagicMock()
    use_case = _use_case(repository)

    result = use_case.execute(
        Authenticated(user_id="u1"),
        _snapshot(),
        build_rate_table("TWD", {}),
        now=NOW,
    )

    assert result.snapshot.holdings[0].quantity == Decimal("47000")
    assert [log.id for log in result.snapshot.logs][-1] == "old"
    assert result.simulation.count(LogStatus.FAILED) == 1

    repository.save_holdings.assert_called_once_with(
        "u1",
        result.snapshot.holdings,
    )
    repository.save_transactions.assert_called_once_with(
        "u1",
        result.simulation.transactions,
    )
    repository.append_logs.assert_called_once_with(
        "u1",
        result.simulation.logs,
    )


def test_execute_does_not_persist_for_guests() -> None:
    """Guests only receive the new snapshot."""
    repository = MagicMock()
    use_case = _use_case(repository)

    result = use_case.execute(
        Guest(),
        _snapshot(),
        build_rate_table("TWD", {}),
        now=NOW,
    )

    assert len(result.snapshot.transactions) == 1
    repository.save_holdings.assert_not_called()
    repository.append_logs.assert_not_called()


def test_execute_mirrors_logs_to_audit_logger() -> None:
    """Failures are audited as warnings and the rest as info."""
    audit_logger = MagicMock()
    use_case = RunAutomationsUseCase(
        logger=MagicMock(),
        audit_logger=audit_logger,
    )

    use_case.execute(Guest(), _snapshot(), build_rate_table("TWD", {}))

    assert audit_logger.info.call_count == 1
    assert audit_logger.warning.call_count == 1
    assert "Broken" in audit_logger.warning.call_args[0][0]
