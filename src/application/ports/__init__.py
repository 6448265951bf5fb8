"""Application ports package."""

from .database import DatabaseEnginePort
from .portfolio_repository import PortfolioRepositoryPort
from .quote_provider import QuoteProviderPort
from .rate_provider import RateProviderPort

__all__ = [
    "DatabaseEnginePort",
    "PortfolioRepositoryPort",
    "QuoteProviderPort",
    "RateProviderPort",
]
