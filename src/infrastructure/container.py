"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import Identity, RateTable, identity_from_user_id
from src.domain.services.fx import build_rate_table
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.portfolio_repository import (
    SqlAlchemyPortfolioRepository,
)
from src.infrastructure.settings import AppSettings
from src.infrastructure.yahoo_finance_client import YahooFinanceClient


def build_settings() -> AppSettings:
    """Return settings sourced from the environment."""
    return AppSettings.from_env()


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_portfolio_repository(
    db_port: DatabaseEnginePort | None = None,
) -> PortfolioRepositoryPort:
    """Return the portfolio repository with its schema in place."""
    resolved_db = db_port or build_database_adapter()
    repository = SqlAlchemyPortfolioRepository(
        resolved_db,
        logger=get_app_logger(),
    )
    repository.prepare_schema()
    return repository


def build_market_data_client(
    settings: AppSettings | None = None,
) -> YahooFinanceClient:
    """Return the quote and rate provider."""
    resolved = settings or build_settings()
    return YahooFinanceClient(
        timeout=resolved.quote_timeout_seconds,
        proxy_prefix=resolved.quote_proxy_prefix,
        currencies=resolved.supported_currencies,
        logger=get_app_logger(),
    )


def build_seed_rates(settings: AppSettings | None = None) -> RateTable:
    """Return the rate table used until a refresh succeeds."""
    resolved = settings or build_settings()
    return build_rate_table(resolved.base_currency, resolved.default_rates)


def build_identity(settings: AppSettings | None = None) -> Identity:
    """Return the identity configured by ``FINANCE_USER_ID``."""
    resolved = settings or build_settings()
    return identity_from_user_id(resolved.user_id)


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_portfolio_repository",
    "build_market_data_client",
    "build_seed_rates",
    "build_identity",
]
