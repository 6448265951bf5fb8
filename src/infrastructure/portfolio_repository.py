"""SQLAlchemy-backed repository for a user's portfolio state.

Statements are plain SQL through ``sqlalchemy.text`` and run unchanged on
PostgreSQL and SQLite. Monetary values live in TEXT columns holding the
Decimal string, since SQLite NUMERIC affinity would turn them into floats;
timestamps are stored as ISO-8601 text. Upserts never move a row between
users: a conflicting id owned by another user is left untouched.
Holdings, categories and automations keep the order they were saved in.
"""

import json
from datetime import datetime
from typing import Iterable

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import (
    Automation,
    AutomationKind,
    CategoryColor,
    CategoryDef,
    CategoryIcon,
    Holding,
    HoldingCategory,
    LogStatus,
    PortfolioSnapshot,
    SystemLog,
    Transaction,
    TransactionKind,
)
from src.utils.decimal_utils import coerce_decimal

CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS holdings (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        position INTEGER NOT NULL DEFAULT 0,
        name TEXT NOT NULL,
        category TEXT NOT NULL,
        price TEXT NOT NULL,
        quantity TEXT NOT NULL,
        currency TEXT NOT NULL,
        ticker TEXT,
        bill_day INTEGER,
        last_updated TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        kind TEXT NOT NULL,
        occurred_at TEXT NOT NULL,
        amount TEXT NOT NULL,
        category TEXT NOT NULL,
        note TEXT NOT NULL DEFAULT '',
        holding_id TEXT,
        holding_name TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        position INTEGER NOT NULL DEFAULT 0,
        label TEXT NOT NULL,
        icon TEXT NOT NULL,
        color TEXT NOT NULL,
        keywords TEXT NOT NULL DEFAULT '[]'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS automations (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        position INTEGER NOT NULL DEFAULT 0,
        name TEXT NOT NULL,
        kind TEXT NOT NULL,
        amount TEXT NOT NULL,
        currency TEXT,
        day_of_month INTEGER NOT NULL,
        transaction_kind TEXT,
        category TEXT,
        target_holding_id TEXT,
        source_holding_id TEXT,
        invest_holding_id TEXT,
        active INTEGER NOT NULL DEFAULT 1,
        last_run TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS system_logs (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        logged_at TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        status TEXT NOT NULL,
        amount TEXT
    )
    """,
)

UPSERT_HOLDING_SQL = text(
    """
    INSERT INTO holdings (
        id, user_id, position, name, category, price, quantity, currency,
        ticker, bill_day, last_updated
    )
    VALUES (
        :id, :user_id, :position, :name, :category, :price, :quantity,
        :currency, :ticker, :bill_day, :last_updated
    )
    ON CONFLICT (id) DO UPDATE SET
        position = excluded.position,
        name = excluded.name,
        category = excluded.category,
        price = excluded.price,
        quantity = excluded.quantity,
        currency = excluded.currency,
        ticker = excluded.ticker,
        bill_day = excluded.bill_day,
        last_updated = excluded.last_updated
    WHERE holdings.user_id = excluded.user_id
    """
)

UPSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id, user_id, kind, occurred_at, amount, category, note, holding_id,
        holding_name
    )
    VALUES (
        :id, :user_id, :kind, :occurred_at, :amount, :category, :note,
        :holding_id, :holding_name
    )
    ON CONFLICT (id) DO UPDATE SET
        kind = excluded.kind,
        occurred_at = excluded.occurred_at,
        amount = excluded.amount,
        category = excluded.category,
        note = excluded.note,
        holding_id = excluded.holding_id,
        holding_name = excluded.holding_name
    WHERE transactions.user_id = excluded.user_id
    """
)

UPSERT_CATEGORY_SQL = text(
    """
    INSERT INTO categories (id, user_id, position, label, icon, color, keywords)
    VALUES (:id, :user_id, :position, :label, :icon, :color, :keywords)
    ON CONFLICT (id) DO UPDATE SET
        position = excluded.position,
        label = excluded.label,
        icon = excluded.icon,
        color = excluded.color,
        keywords = excluded.keywords
    WHERE categories.user_id = excluded.user_id
    """
)

UPSERT_AUTOMATION_SQL = text(
    """
    INSERT INTO automations (
        id, user_id, position, name, kind, amount, currency, day_of_month,
        transaction_kind, category, target_holding_id, source_holding_id,
        invest_holding_id, active, last_run
    )
    VALUES (
        :id, :user_id, :position, :name, :kind, :amount, :currency,
        :day_of_month, :transaction_kind, :category, :target_holding_id,
        :source_holding_id, :invest_holding_id, :active, :last_run
    )
    ON CONFLICT (id) DO UPDATE SET
        position = excluded.position,
        name = excluded.name,
        kind = excluded.kind,
        amount = excluded.amount,
        currency = excluded.currency,
        day_of_month = excluded.day_of_month,
        transaction_kind = excluded.transaction_kind,
        category = excluded.category,
        target_holding_id = excluded.target_holding_id,
        source_holding_id = excluded.source_holding_id,
        invest_holding_id = excluded.invest_holding_id,
        active = excluded.active,
        last_run = excluded.last_run
    WHERE automations.user_id = excluded.user_id
    """
)

INSERT_LOG_SQL = text(
    """
    INSERT INTO system_logs (
        id, user_id, logged_at, title, description, status, amount
    )
    VALUES (
        :id, :user_id, :logged_at, :title, :description, :status, :amount
    )
    ON CONFLICT (id) DO NOTHING
    """
)

SELECT_HOLDINGS_SQL = text(
    """
    SELECT id, name, category, price, quantity, currency, ticker, bill_day,
           last_updated
    FROM holdings
    WHERE user_id = :user_id
    ORDER BY position, id
    """
)

SELECT_TRANSACTIONS_SQL = text(
    """
    SELECT id, kind, occurred_at, amount, category, note, holding_id,
           holding_name
    FROM transactions
    WHERE user_id = :user_id
    ORDER BY occurred_at DESC, id
    """
)

SELECT_CATEGORIES_SQL = text(
    """
    SELECT id, label, icon, color, keywords
    FROM categories
    WHERE user_id = :user_id
    ORDER BY position, id
    """
)

SELECT_AUTOMATIONS_SQL = text(
    """
    SELECT id, name, kind, amount, currency, day_of_month, transaction_kind,
           category, target_holding_id, source_holding_id, invest_holding_id,
           active, last_run
    FROM automations
    WHERE user_id = :user_id
    ORDER BY position, id
    """
)

SELECT_LOGS_SQL = text(
    """
    SELECT id, logged_at, title, description, status, amount
    FROM system_logs
    WHERE user_id = :user_id
    ORDER BY logged_at DESC, id
    """
)

DELETE_BY_ID_SQL = {
    table: text(f"DELETE FROM {table} WHERE user_id = :user_id AND id = :id")
    for table in ("holdings", "transactions", "categories", "automations")
}

CLEAR_LOGS_SQL = text("DELETE FROM system_logs WHERE user_id = :user_id")


class SqlAlchemyPortfolioRepository(PortfolioRepositoryPort):
    """Repository backed by SQLAlchemy for every user-owned entity."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the portfolio engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger

    def prepare_schema(self) -> None:
        """Create the portfolio tables if they do not exist yet."""
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    def fetch_snapshot(self, user_id: str) -> PortfolioSnapshot:
        params = {"user_id": user_id}
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            holdings = conn.execute(SELECT_HOLDINGS_SQL, params).all()
            transactions = conn.execute(SELECT_TRANSACTIONS_SQL, params).all()
            categories = conn.execute(SELECT_CATEGORIES_SQL, params).all()
            automations = conn.execute(SELECT_AUTOMATIONS_SQL, params).all()
            logs = conn.execute(SELECT_LOGS_SQL, params).all()

        snapshot = PortfolioSnapshot(
            holdings=tuple(self._to_holding(row) for row in holdings),
            transactions=tuple(
                self._to_transaction(row) for row in transactions
            ),
            categories=tuple(self._to_category(row) for row in categories),
            automations=tuple(
                self._to_automation(row) for row in automations
            ),
            logs=tuple(self._to_log(row) for row in logs),
        )
        if self._logger:
            self._logger.info(
                f"Loaded portfolio for user={user_id}: "
                f"holdings={len(snapshot.holdings)}, "
                f"transactions={len(snapshot.transactions)}"
            )
        return snapshot

    def save_holdings(self, user_id: str, holdings: Iterable[Holding]) -> None:
        payload = [
            {
                "id": holding.id,
                "user_id": user_id,
                "position": position,
                "name": holding.name,
                "category": holding.category.value,
                "price": str(holding.price),
                "quantity": str(holding.quantity),
                "currency": holding.currency,
                "ticker": holding.ticker,
                "bill_day": holding.bill_day,
                "last_updated": _to_iso(holding.last_updated),
            }
            for position, holding in enumerate(holdings)
        ]
        self._execute_many(UPSERT_HOLDING_SQL, payload)

    def delete_holding(self, user_id: str, holding_id: str) -> None:
        self._delete("holdings", user_id, holding_id)

    def save_transactions(
        self,
        user_id: str,
        transactions: Iterable[Transaction],
    ) -> None:
        payload = [
            {
                "id": transaction.id,
                "user_id": user_id,
                "kind": transaction.kind.value,
                "occurred_at": _to_iso(transaction.timestamp),
                "amount": str(transaction.amount),
                "category": transaction.category,
                "note": transaction.note,
                "holding_id": transaction.holding_id,
                "holding_name": transaction.holding_name,
            }
            for transaction in transactions
        ]
        self._execute_many(UPSERT_TRANSACTION_SQL, payload)

    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        self._delete("transactions", user_id, transaction_id)

    def save_categories(
        self,
        user_id: str,
        categories: Iterable[CategoryDef],
    ) -> None:
        payload = [
            {
                "id": category.id,
                "user_id": user_id,
                "position": position,
                "label": category.label,
                "icon": category.icon.value,
                "color": category.color.value,
                "keywords": json.dumps(
                    list(category.keywords),
                    ensure_ascii=False,
                ),
            }
            for position, category in enumerate(categories)
        ]
        self._execute_many(UPSERT_CATEGORY_SQL, payload)

    def delete_category(self, user_id: str, category_id: str) -> None:
        self._delete("categories", user_id, category_id)

    def save_automations(
        self,
        user_id: str,
        automations: Iterable[Automation],
    ) -> None:
        payload = [
            {
                "id": rule.id,
                "user_id": user_id,
                "position": position,
                "name": rule.name,
                "kind": rule.kind.value,
                "amount": str(rule.amount),
                "currency": rule.currency,
                "day_of_month": rule.day_of_month,
                "transaction_kind": (
                    rule.transaction_kind.value
                    if rule.transaction_kind
                    else None
                ),
                "category": rule.category,
                "target_holding_id": rule.target_holding_id,
                "source_holding_id": rule.source_holding_id,
                "invest_holding_id": rule.invest_holding_id,
                "active": 1 if rule.active else 0,
                "last_run": _to_iso(rule.last_run),
            }
            for position, rule in enumerate(automations)
        ]
        self._execute_many(UPSERT_AUTOMATION_SQL, payload)

    def delete_automation(self, user_id: str, automation_id: str) -> None:
        self._delete("automations", user_id, automation_id)

    def append_logs(self, user_id: str, logs: Iterable[SystemLog]) -> None:
        payload = [
            {
                "id": log.id,
                "user_id": user_id,
                "logged_at": _to_iso(log.timestamp),
                "title": log.title,
                "description": log.description,
                "status": log.status.value,
                "amount": log.amount,
            }
            for log in logs
        ]
        self._execute_many(INSERT_LOG_SQL, payload)

    def clear_logs(self, user_id: str) -> None:
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(CLEAR_LOGS_SQL, {"user_id": user_id})

    def _execute_many(self, statement, payload: list[dict]) -> None:
        if not payload:
            return
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(statement, payload)

    def _delete(self, table: str, user_id: str, entity_id: str) -> None:
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(
                DELETE_BY_ID_SQL[table],
                {"user_id": user_id, "id": entity_id},
            )

    @staticmethod
    def _to_holding(row) -> Holding:
        return Holding(
            id=row.id,
            name=row.name,
            category=HoldingCategory(row.category),
            price=coerce_decimal(row.price),
            quantity=coerce_decimal(row.quantity),
            currency=row.currency,
            ticker=row.ticker,
            bill_day=row.bill_day,
            last_updated=_from_iso(row.last_updated),
        )

    @staticmethod
    def _to_transaction(row) -> Transaction:
        return Transaction(
            id=row.id,
            kind=TransactionKind(row.kind),
            timestamp=_from_iso(row.occurred_at),
            amount=coerce_decimal(row.amount),
            category=row.category,
            note=row.note or "",
            holding_id=row.holding_id,
            holding_name=row.holding_name,
        )

    @staticmethod
    def _to_category(row) -> CategoryDef:
        return CategoryDef(
            id=row.id,
            label=row.label,
            icon=CategoryIcon.from_key(row.icon),
            color=CategoryColor.from_key(row.color),
            keywords=tuple(json.loads(row.keywords or "[]")),
        )

    @staticmethod
    def _to_automation(row) -> Automation:
        return Automation(
            id=row.id,
            name=row.name,
            kind=AutomationKind(row.kind),
            amount=coerce_decimal(row.amount),
            currency=row.currency,
            day_of_month=row.day_of_month,
            transaction_kind=(
                TransactionKind(row.transaction_kind)
                if row.transaction_kind
                else None
            ),
            category=row.category,
            target_holding_id=row.target_holding_id,
            source_holding_id=row.source_holding_id,
            invest_holding_id=row.invest_holding_id,
            active=bool(row.active),
            last_run=_from_iso(row.last_run),
        )

    @staticmethod
    def _to_log(row) -> SystemLog:
        return SystemLog(
            id=row.id,
            timestamp=_from_iso(row.logged_at),
            title=row.title,
            description=row.description,
            status=LogStatus(row.status),
            amount=row.amount,
        )


def _to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _from_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


__all__ = ["SqlAlchemyPortfolioRepository", "CREATE_TABLES_SQL"]
