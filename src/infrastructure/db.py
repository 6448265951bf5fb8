"""Database infrastructure for the personal finance ledger.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine backing the portfolio store. It belongs to the infrastructure layer
because it deals with external systems (PostgreSQL or SQLite).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort

FINANCE_DB_URL_ENV = "FINANCE_DB_URL"


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Values from a ``.env`` file are loaded first.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Server databases get a small connection pool; SQLite files use the
    dialect's default pool.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with health checks enabled.
    """
    if make_url(db_url).get_backend_name() == "sqlite":
        return create_engine(db_url, pool_pre_ping=True, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the portfolio database.

    Returns:
        Engine: Lazily initialized engine connected to ``FINANCE_DB_URL``.
    """
    global _engine
    if _engine is None:
        db_url = _get_env_var(FINANCE_DB_URL_ENV)
        _engine = _create_engine(db_url)
    return _engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so repositories can depend only on the protocol.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def get_engine(self) -> Engine:
        """Get the engine for the portfolio database.

        Returns:
            Engine: Injected engine, or the process-wide singleton.
        """
        if self._engine is not None:
            return self._engine
        return get_engine()


__all__ = ["get_engine", "SqlAlchemyDatabaseEngineAdapter"]
