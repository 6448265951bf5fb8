"""Port for reading and writing a user's portfolio state."""

from typing import Iterable, Protocol

from src.domain.models import (
    Automation,
    CategoryDef,
    Holding,
    PortfolioSnapshot,
    SystemLog,
    Transaction,
)


class PortfolioRepositoryPort(Protocol):
    """Port exposing persistence of every entity owned by a user."""

    def fetch_snapshot(self, user_id: str) -> PortfolioSnapshot:
        """Return the stored state for a user.

        Transactions and logs are returned newest first.
        """

    def save_holdings(self, user_id: str, holdings: Iterable[Holding]) -> None:
        """Insert or update holdings by id."""

    def delete_holding(self, user_id: str, holding_id: str) -> None:
        """Delete a holding."""

    def save_transactions(
        self,
        user_id: str,
        transactions: Iterable[Transaction],
    ) -> None:
        """Insert or update transactions by id."""

    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        """Delete a transaction."""

    def save_categories(
        self,
        user_id: str,
        categories: Iterable[CategoryDef],
    ) -> None:
        """Insert or update categories by id."""

    def delete_category(self, user_id: str, category_id: str) -> None:
        """Delete a category."""

    def save_automations(
        self,
        user_id: str,
        automations: Iterable[Automation],
    ) -> None:
        """Insert or update automation rules by id."""

    def delete_automation(self, user_id: str, automation_id: str) -> None:
        """Delete an automation rule."""

    def append_logs(self, user_id: str, logs: Iterable[SystemLog]) -> None:
        """Append system log entries."""

    def clear_logs(self, user_id: str) -> None:
        """Delete every system log entry for a user."""


__all__ = ["PortfolioRepositoryPort"]
