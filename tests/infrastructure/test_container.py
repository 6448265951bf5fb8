"""Tests for the composition root."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import Authenticated, Guest
from src.infrastructure import container
from src.infrastructure.portfolio_repository import (
    SqlAlchemyPortfolioRepository,
)
from src.infrastructure.settings import AppSettings
from src.infrastructure.yahoo_finance_client import YahooFinanceClient


def _settings(**overrides) -> AppSettings:
    values = {
        "base_currency": "TWD",
        "supported_currencies": ("TWD", "USD", "JPY"),
        "display_currency": "TWD",
        "quote_timeout_seconds": 3.0,
        "quote_proxy_prefix": None,
        "user_id": None,
        "default_rates": {"USD": "0.031", "JPY": "4.7"},
    }
    values.update(overrides)
    return AppSettings(**values)


def test_build_portfolio_repository_prepares_schema(monkeypatch) -> None:
    """The repository is returned with its tables created."""
    prepared = []
    monkeypatch.setattr(
        SqlAlchemyPortfolioRepository,
        "prepare_schema",
        lambda self: prepared.append(self),
    )
    db_port = MagicMock()

    repository = container.build_portfolio_repository(db_port)

    assert isinstance(repository, SqlAlchemyPortfolioRepository)
    assert prepared == [repository]
    assert repository._db_port is db_port


def test_build_market_data_client_uses_settings() -> None:
    client = container.build_market_data_client(
        _settings(quote_proxy_prefix="https://proxy/?")
    )

    assert isinstance(client, YahooFinanceClient)
    assert client._proxy_prefix == "https://proxy/?"
    assert client._currencies == ("TWD", "USD", "JPY")
    client.close()


def test_build_seed_rates_anchors_on_base_currency() -> None:
    rates = container.build_seed_rates(_settings())

    assert rates.base_currency == "TWD"
    assert rates.rates["TWD"] == Decimal("1")
    assert rates.rates["USD"] == Decimal("0.031")


def test_build_identity_reflects_configured_user() -> None:
    assert container.build_identity(_settings()) == Guest()
    assert container.build_identity(_settings(user_id="u1")) == (
        Authenticated(user_id="u1")
    )
