"""Application use cases package."""

from .get_portfolio_valuation import GetPortfolioValuationUseCase
from .load_portfolio import LoadPortfolioUseCase
from .manage_portfolio import ManagePortfolioUseCase
from .record_transaction import RecordTransactionUseCase
from .refresh_quotes import RefreshQuotesResult, RefreshQuotesUseCase
from .refresh_rates import RefreshRatesUseCase
from .run_automations import RunAutomationsResult, RunAutomationsUseCase

__all__ = [
    "GetPortfolioValuationUseCase",
    "LoadPortfolioUseCase",
    "ManagePortfolioUseCase",
    "RecordTransactionUseCase",
    "RefreshQuotesResult",
    "RefreshQuotesUseCase",
    "RefreshRatesUseCase",
    "RunAutomationsResult",
    "RunAutomationsUseCase",
]
