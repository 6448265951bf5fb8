"""Use case for explicit edits of holdings, categories and automations."""

import uuid
from dataclasses import replace

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.errors import UnknownEntity
from src.domain.models import (
    Authenticated,
    Automation,
    CategoryDef,
    Holding,
    Identity,
    PortfolioSnapshot,
)
from src.domain.services.validation import validate_holding
from src.infrastructure.logging.logger import get_app_logger


class ManagePortfolioUseCase:
    """Apply user edits to a snapshot and mirror them to storage.

    Holdings, categories and automations are saved as full ordered lists
    so the stored order matches the snapshot.
    """

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
            id_factory: Optional callable producing ids for new entities.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex[:12])

    def new_id(self) -> str:
        """Return a fresh entity identifier."""
        return self._id_factory()

    def add_holding(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        holding: Holding,
    ) -> PortfolioSnapshot:
        """Append a holding after validating it.

        Raises:
            ValueError: The holding is malformed.
        """
        validate_holding(holding, self._logger)
        updated = replace(snapshot, holdings=snapshot.holdings + (holding,))
        self._logger.info(f"Holding added: id={holding.id}, name={holding.name}")
        if self._persists(identity):
            self._repository.save_holdings(identity.user_id, updated.holdings)
        return updated

    def update_holding(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        holding_id: str,
        **changes,
    ) -> PortfolioSnapshot:
        """Apply field changes to a holding.

        Raises:
            UnknownEntity: The holding does not exist.
            ValueError: The edited holding is malformed.
        """
        current = snapshot.find_holding(holding_id)
        if current is None:
            raise UnknownEntity("holding", holding_id)
        edited = replace(current, **changes)
        validate_holding(edited, self._logger)
        updated = replace(
            snapshot,
            holdings=tuple(
                edited if h.id == holding_id else h for h in snapshot.holdings
            ),
        )
        self._logger.info(
            f"Holding updated: id={holding_id}, fields={sorted(changes)}"
        )
        if self._persists(identity):
            self._repository.save_holdings(identity.user_id, updated.holdings)
        return updated

    def remove_holding(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        holding_id: str,
    ) -> PortfolioSnapshot:
        """Remove a holding.

        Transactions and rules that reference it are kept; rules will fail
        with a missing reference on their next run.

        Raises:
            UnknownEntity: The holding does not exist.
        """
        if snapshot.find_holding(holding_id) is None:
            raise UnknownEntity("holding", holding_id)
        updated = replace(
            snapshot,
            holdings=tuple(h for h in snapshot.holdings if h.id != holding_id),
        )
        self._logger.info(f"Holding removed: id={holding_id}")
        if self._persists(identity):
            self._repository.delete_holding(identity.user_id, holding_id)
        return updated

    def add_category(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        category: CategoryDef,
    ) -> PortfolioSnapshot:
        """Append a category."""
        updated = replace(
            snapshot,
            categories=snapshot.categories + (category,),
        )
        self._logger.info(f"Category added: label={category.label}")
        if self._persists(identity):
            self._repository.save_categories(
                identity.user_id,
                updated.categories,
            )
        return updated

    def update_category(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        category_id: str,
        **changes,
    ) -> PortfolioSnapshot:
        """Apply field changes to a category.

        Renaming a category does not relabel past transactions.

        Raises:
            UnknownEntity: The category does not exist.
        """
        if not any(c.id == category_id for c in snapshot.categories):
            raise UnknownEntity("category", category_id)
        updated = replace(
            snapshot,
            categories=tuple(
                replace(c, **changes) if c.id == category_id else c
                for c in snapshot.categories
            ),
        )
        self._logger.info(
            f"Category updated: id={category_id}, fields={sorted(changes)}"
        )
        if self._persists(identity):
            self._repository.save_categories(
                identity.user_id,
                updated.categories,
            )
        return updated

    def remove_category(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        category_id: str,
    ) -> PortfolioSnapshot:
        """Remove a category.

        Raises:
            UnknownEntity: The category does not exist.
        """
        if not any(c.id == category_id for c in snapshot.categories):
            raise UnknownEntity("category", category_id)
        updated = replace(
            snapshot,
            categories=tuple(
                c for c in snapshot.categories if c.id != category_id
            ),
        )
        self._logger.info(f"Category removed: id={category_id}")
        if self._persists(identity):
            self._repository.delete_category(identity.user_id, category_id)
        return updated

    def add_automation(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        automation: Automation,
    ) -> PortfolioSnapshot:
        """Append an automation rule; it runs after every existing rule."""
        updated = replace(
            snapshot,
            automations=snapshot.automations + (automation,),
        )
        self._logger.info(
            f"Automation added: id={automation.id}, kind={automation.kind.value}"
        )
        if self._persists(identity):
            self._repository.save_automations(
                identity.user_id,
                updated.automations,
            )
        return updated

    def update_automation(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        automation_id: str,
        **changes,
    ) -> PortfolioSnapshot:
        """Apply field changes to a rule, e.g. toggling ``active``.

        Raises:
            UnknownEntity: The rule does not exist.
        """
        if not any(a.id == automation_id for a in snapshot.automations):
            raise UnknownEntity("automation", automation_id)
        updated = replace(
            snapshot,
            automations=tuple(
                replace(a, **changes) if a.id == automation_id else a
                for a in snapshot.automations
            ),
        )
        self._logger.info(
            f"Automation updated: id={automation_id}, fields={sorted(changes)}"
        )
        if self._persists(identity):
            self._repository.save_automations(
                identity.user_id,
                updated.automations,
            )
        return updated

    def remove_automation(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        automation_id: str,
    ) -> PortfolioSnapshot:
        """Remove an automation rule.

        Raises:
            UnknownEntity: The rule does not exist.
        """
        if not any(a.id == automation_id for a in snapshot.automations):
            raise UnknownEntity("automation", automation_id)
        updated = replace(
            snapshot,
            automations=tuple(
                a for a in snapshot.automations if a.id != automation_id
            ),
        )
        self._logger.info(f"Automation removed: id={automation_id}")
        if self._persists(identity):
            self._repository.delete_automation(identity.user_id, automation_id)
        return updated

    def clear_logs(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
    ) -> PortfolioSnapshot:
        """Drop every system log entry."""
        updated = replace(snapshot, logs=())
        self._logger.info("System logs cleared")
        if self._persists(identity):
            self._repository.clear_logs(identity.user_id)
        return updated

    def _persists(self, identity: Identity) -> bool:
        return isinstance(identity, Authenticated) and self._repository is not None


__all__ = ["ManagePortfolioUseCase"]
