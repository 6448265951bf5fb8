"""CLI adapter to refresh exchange rates and holding prices.

Prints the resulting net worth in the configured display currency along
with the expenses of the last seven days.
"""

from datetime import date

from src.application.use_cases.get_portfolio_valuation import (
    GetPortfolioValuationUseCase,
)
from src.application.use_cases.load_portfolio import LoadPortfolioUseCase
from src.application.use_cases.refresh_quotes import RefreshQuotesUseCase
from src.application.use_cases.refresh_rates import RefreshRatesUseCase
from src.domain.models import Authenticated
from src.domain.services.finance import summarize_daily_expenses
from src.infrastructure.container import (
    build_identity,
    build_market_data_client,
    build_portfolio_repository,
    build_seed_rates,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Refresh market data and print the portfolio valuation."""
    logger = get_app_logger()
    settings = build_settings()
    identity = build_identity(settings)
    repository = (
        build_portfolio_repository()
        if isinstance(identity, Authenticated)
        else None
    )
    snapshot = LoadPortfolioUseCase(repository, logger=logger).execute(identity)

    client = build_market_data_client(settings)
    try:
        rates = RefreshRatesUseCase(client, logger=logger).execute(
            build_seed_rates(settings)
        )
        refreshed = RefreshQuotesUseCase(
            client,
            repository=repository,
            base_currency=settings.base_currency,
            logger=logger,
        ).execute(identity, snapshot, rates)
    finally:
        client.close()

    valuation = GetPortfolioValuationUseCase(logger=logger).execute(
        refreshed.snapshot.holdings,
        rates,
        settings.display_currency,
    )
    summary = valuation.summary

    print(
        f"Quotes refreshed: {refreshed.updated_count} updated, "
        f"{refreshed.failed_count} unavailable."
    )
    print(
        f"Net worth: {summary.net_worth:,.2f} {summary.currency_code} "
        f"(assets {summary.asset_total:,.2f}, "
        f"liabilities {summary.liability_total:,.2f})"
    )
    for item in valuation.allocation.slices:
        print(f"  {item.category.value}: {item.percentage}%")
    for expense in summarize_daily_expenses(
        refreshed.snapshot.transactions,
        today=date.today(),
    ):
        print(f"  {expense.day.isoformat()}: {expense.amount} {rates.base_currency}")


if __name__ == "__main__":  # pragma: no cover
    main()
