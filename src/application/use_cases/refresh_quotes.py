"""Use case to refresh holding prices from market quotes."""

from dataclasses import dataclass, replace

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.application.ports.quote_provider import QuoteProviderPort
from src.domain.constants import BASE_CURRENCY
from src.domain.errors import ConversionError
from src.domain.models import (
    Authenticated,
    Identity,
    PortfolioSnapshot,
    RateTable,
)
from src.domain.services.market import apply_quote
from src.domain.services.normalization import resolve_market
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class RefreshQuotesResult:
    """Result of a refresh_quotes run.

    Attributes:
        snapshot: Snapshot with refreshed prices.
        updated_count: Holdings repriced from a fresh quote.
        failed_count: Quotable holdings whose quote was unavailable.
    """

    snapshot: PortfolioSnapshot
    updated_count: int
    failed_count: int


class RefreshQuotesUseCase:
    """Reprice stock and crypto holdings that carry a ticker.

    A failed quote, or one whose currency cannot be converted into the
    holding currency, keeps the holding's cached price.
    """

    def __init__(
        self,
        provider: QuoteProviderPort,
        repository: PortfolioRepositoryPort | None = None,
        base_currency: str = BASE_CURRENCY,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            provider: Port returning market quotes.
            repository: Persistence port; only needed for signed-in users.
            base_currency: Currency identifying domestic listings.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._provider = provider
        self._repository = repository
        self._base_currency = base_currency
        self._logger = logger or get_app_logger()

    def execute(
        self,
        identity: Identity,
        snapshot: PortfolioSnapshot,
        rates: RateTable | None = None,
    ) -> RefreshQuotesResult:
        """Refresh every quotable holding.

        Args:
            identity: Signed-in user or guest.
            snapshot: Current portfolio state.
            rates: Rate table converting quotes listed in another currency.

        Returns:
            RefreshQuotesResult: New snapshot and refresh counters.
        """
        holdings = []
        updated_count = 0
        failed_count = 0
        for holding in snapshot.holdings:
            if not holding.is_quotable:
                holdings.append(holding)
                continue
            market = resolve_market(holding, self._base_currency)
            quote = self._provider.fetch_quote(holding.ticker, market)
            if quote is None:
                self._logger.warning(
                    f"No quote for holding={holding.id} "
                    f"ticker={holding.ticker}; keeping cached price"
                )
                failed_count += 1
                holdings.append(holding)
                continue
            try:
                repriced = apply_quote(holding, quote, rates)
            except ConversionError as exc:
                self._logger.warning(
                    f"Quote for holding={holding.id} not applied: {exc}"
                )
                failed_count += 1
                holdings.append(holding)
                continue
            holdings.append(repriced)
            updated_count += 1

        updated = replace(snapshot, holdings=tuple(holdings))
        self._logger.info(
            f"Quotes refreshed: updated={updated_count}, failed={failed_count}"
        )
        if (
            updated_count
            and isinstance(identity, Authenticated)
            and self._repository is not None
        ):
            self._repository.save_holdings(identity.user_id, updated.holdings)
        return RefreshQuotesResult(
            snapshot=updated,
            updated_count=updated_count,
            failed_count=failed_count,
        )


__all__ = ["RefreshQuotesUseCase", "RefreshQuotesResult"]
