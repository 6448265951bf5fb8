"""Use case to run one automation simulation pass and persist its output."""

from dataclasses import dataclass
from datetime import datetime

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import (
    Authenticated,
    Identity,
    LogStatus,
    PortfolioSnapshot,
    RateTable,
    SimulationResult,
)
from src.domain.services.automation import run_automations
from src.infrastructure.logging.logger import get_app_logger, get_audit_logger


@dataclass(frozen=True)
class RunAutomationsResult:
    """Result of a run_automations execution.

    Attributes:
        snapshot: Snapshot with the pass folded in.
        simulation: Raw outcome of the pass.
    """

    snapshot: PortfolioSnapshot
    simulation: SimulationResult


class RunAutomationsUseCase:
    """Simulate every active rule once and store the outcome.

    The pass itself never touches storage. Once it completes, signed-in
    users get their holdings, the new transactions and the new log entries
    saved; guests only receive the new snapshot.
    """

    def __init__(
        self,
        repository: PortfolioRepositoryPort | None = None,
        logger=None,
        audit_logger=None,
        id_factory=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Persistence port; only needed for signed-in users.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving one line per log entry.
            id_factory: Optional callable producing identifiers.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()
        self._id_factory = id_factory

    def execute(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        rates: RateTable,
        now: datetime | None = None,
    ) -> RunAutomationsResult:
        """Run one simulation pass.

        Args:
            identity: Signed-in user or guest.
            snapshot: Current portfolio state.
            rates: Rate table anchored to the base currency.
            now: Optional timestamp for created records.

        Returns:
            RunAutomationsResult: New snapshot and the raw pass outcome.
        """
        simulation = run_automations(
            snapshot.automations,
            snapshot.holdings,
            rates,
            now=now,
            id_factory=self._id_factory,
            logger=self._logger,
        )
        updated = snapshot.apply_simulation(simulation)

        for entry in simulation.logs:
            message = f"{entry.status.value} | {entry.title} | {entry.description}"
            if entry.status == LogStatus.FAILED:
                self._audit_logger.warning(message)
            else:
                self._audit_logger.info(message)

        if isinstance(identity, Authenticated) and self._repository is not None:
            user_id = identity.user_id
            self._repository.save_holdings(user_id, updated.holdings)
            self._repository.save_transactions(user_id, simulation.transactions)
            self._repository.append_logs(user_id, simulation.logs)
            self._logger.info(
                f"Automation results stored for user={user_id}: "
                f"transactions={len(simulation.transactions)}, "
                f"logs={len(simulation.logs)}"
            )

        return RunAutomationsResult(snapshot=updated, simulation=simulation)


__all__ = ["RunAutomationsUseCase", "RunAutomationsResult"]
