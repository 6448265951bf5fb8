"""Use case to value a holdings snapshot in a display currency."""

from typing import Iterable

from src.domain.models import Holding, PortfolioValuation, RateTable
from src.domain.services.finance import (
    compute_allocation_breakdown,
    compute_net_worth_summary,
    compute_section_totals,
)
from src.domain.services.fx import validate_rate_table
from src.domain.services.normalization import normalize_currency
from src.infrastructure.logging.logger import get_app_logger


class GetPortfolioValuationUseCase:
    """Compute net worth, section subtotals and allocation."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()

    def execute(
        self,
        holdings: Iterable[Holding],
        rates: RateTable,
        display_currency: str,
    ) -> PortfolioValuation:
        """Return the valuation of the holdings.

        Args:
            holdings: Holdings snapshot.
            rates: Rate table anchored to the base currency.
            display_currency: Currency to express every figure in.

        Returns:
            PortfolioValuation: Summary, section totals and allocation.

        Raises:
            UnsupportedCurrency: A holding or the display currency cannot be
                converted with the given rates.
            InvalidRate: A needed rate is unusable.
        """
        snapshot = list(holdings)
        currency = normalize_currency(display_currency)
        validate_rate_table(
            rates,
            {currency, *(holding.currency for holding in snapshot)},
        )

        summary = compute_net_worth_summary(snapshot, rates, currency)
        sections = compute_section_totals(snapshot, rates, currency)
        allocation = compute_allocation_breakdown(snapshot, rates, currency)

        self._logger.info(
            f"Valuation computed: net_worth={summary.net_worth} {currency}, "
            f"assets={summary.asset_total}, "
            f"liabilities={summary.liability_total}"
        )
        return PortfolioValuation(
            summary=summary,
            sections=sections,
            allocation=allocation,
        )


__all__ = ["GetPortfolioValuationUseCase"]
