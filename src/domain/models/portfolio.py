"""Domain model for the complete user state snapshot."""

from dataclasses import dataclass, field, replace

from src.domain.models.automation import Automation, SimulationResult, SystemLog
from src.domain.models.holdings import Holding
from src.domain.models.ledger import CategoryDef, Transaction


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Immutable state passed into and returned from use cases.

    Transactions and logs are kept newest first.
    """

    holdings: tuple[Holding, ...] = field(default_factory=tuple)
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    categories: tuple[CategoryDef, ...] = field(default_factory=tuple)
    automations: tuple[Automation, ...] = field(default_factory=tuple)
    logs: tuple[SystemLog, ...] = field(default_factory=tuple)

    def find_holding(self, holding_id: str | None) -> Holding | None:
        """Return the holding with the given id, if present."""
        return next((h for h in self.holdings if h.id == holding_id), None)

    def find_transaction(self, transaction_id: str) -> Transaction | None:
        """Return the transaction with the given id, if present."""
        return next(
            (t for t in self.transactions if t.id == transaction_id),
            None,
        )

    def apply_simulation(self, result: SimulationResult) -> "PortfolioSnapshot":
        """Return a snapshot with a simulation pass folded in.

        Args:
            result: Outcome of ``run_automations``.

        Returns:
            PortfolioSnapshot: Snapshot with the new holdings and the new
            transactions and logs prepended to history.
        """
        return replace(
            self,
            holdings=result.holdings,
            transactions=result.transactions + self.transactions,
            logs=result.logs + self.logs,
        )


__all__ = ["PortfolioSnapshot"]
