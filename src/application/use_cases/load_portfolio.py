"""Use case to load the portfolio state for the current identity."""

from dataclasses import replace

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.constants import DEFAULT_CATEGORIES
from src.domain.models import Authenticated, Identity, PortfolioSnapshot
from src.domain.services.validation import validate_quantity_sign
from src.infrastructure.logging.logger import get_app_logger


class LoadPortfolioUseCase:
    """Load the stored snapshot for a user, or a fresh one for guests.

    Users with no stored categories receive the default category set.
    """

    def __init__(
        self,
        repository: PortfolioRepositoryPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Persistence port; only needed for signed-in users.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, identity: Identity) -> PortfolioSnapshot:
        """Return the portfolio snapshot for an identity.

        Args:
            identity: Signed-in user or guest.

        Returns:
            PortfolioSnapshot: Stored state, or an empty guest state holding
            only the default categories.
        """
        if not isinstance(identity, Authenticated) or self._repository is None:
            self._logger.info("Loading guest portfolio")
            return PortfolioSnapshot(categories=DEFAULT_CATEGORIES)

        snapshot = self._repository.fetch_snapshot(identity.user_id)
        for holding in snapshot.holdings:
            validate_quantity_sign(holding, self._logger)
        if not snapshot.categories:
            self._logger.info(
                f"No categories stored for user={identity.user_id}; "
                "using defaults"
            )
            snapshot = replace(snapshot, categories=DEFAULT_CATEGORIES)
        self._logger.info(
            f"Portfolio loaded for user={identity.user_id}: "
            f"holdings={len(snapshot.holdings)}, "
            f"automations={len(snapshot.automations)}"
        )
        return snapshot


__all__ = ["LoadPortfolioUseCase"]
