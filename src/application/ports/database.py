"""Database ports for the personal finance ledger.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide a
concrete adapter that satisfies this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine backing the portfolio store.

    Repositories can depend on this protocol instead of concrete database
    drivers or configuration details.
    """

    def get_engine(self) -> Engine:
        """Get the engine for the portfolio database.

        Returns:
            Engine: SQLAlchemy engine connected to the portfolio store.
        """


__all__ = ["DatabaseEnginePort"]
