"""Domain models for automation rules and their audit trail."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from src.domain.models.holdings import Holding
from src.domain.models.ledger import Transaction, TransactionKind


class AutomationKind(str, Enum):
    """Kind of recurring effect a rule describes."""

    RECURRING = "RECURRING"
    DCA_INVEST = "DCA_INVEST"


class LogStatus(str, Enum):
    """Outcome of one rule evaluation."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class Automation:
    """User-defined rule describing a recurring effect.

    Attributes:
        id: Rule identifier.
        name: Display name.
        kind: RECURRING or DCA_INVEST.
        amount: Fixed sum (RECURRING) or budget ceiling (DCA_INVEST).
        currency: Informational currency tag; ``amount`` is always read
            in the base currency.
        day_of_month: Informational trigger day (1-31).
        transaction_kind: RECURRING direction; None means EXPENSE.
        category: RECURRING category label.
        target_holding_id: RECURRING holding to credit or debit.
        source_holding_id: DCA funding holding.
        invest_holding_id: DCA security holding.
        active: Inactive rules are ignored by a simulation pass.
        last_run: Optional marker kept for callers.
    """

    id: str
    name: str
    kind: AutomationKind
    amount: Decimal
    currency: str | None = None
    day_of_month: int = 1
    transaction_kind: TransactionKind | None = None
    category: str | None = None
    target_holding_id: str | None = None
    source_holding_id: str | None = None
    invest_holding_id: str | None = None
    active: bool = True
    last_run: datetime | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(
                f"Automation amount must be non-negative: {self.amount}"
            )
        if not 1 <= self.day_of_month <= 31:
            raise ValueError(
                f"Automation day_of_month must be within 1-31: "
                f"{self.day_of_month}"
            )


@dataclass(frozen=True)
class SystemLog:
    """Audit entry produced by one rule evaluation."""

    id: str
    timestamp: datetime
    title: str
    description: str
    status: LogStatus
    amount: str | None = None


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of a simulation pass.

    Attributes:
        holdings: Holdings snapshot after every rule was applied.
        transactions: Transactions created by the pass, in rule order.
        logs: Log entries created by the pass, in rule order.
    """

    holdings: tuple[Holding, ...]
    transactions: tuple[Transaction, ...]
    logs: tuple[SystemLog, ...]

    def count(self, status: LogStatus) -> int:
        """Return how many rules ended with the given status."""
        return sum(1 for log in self.logs if log.status == status)


__all__ = [
    "AutomationKind",
    "LogStatus",
    "Automation",
    "SystemLog",
    "SimulationResult",
]
