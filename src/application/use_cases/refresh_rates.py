"""Use case to refresh exchange rates from a provider."""

from src.application.ports.rate_provider import RateProviderPort
from src.domain.errors import ConversionError
from src.domain.models import RateTable
from src.domain.services.fx import validate_rate_table
from src.infrastructure.logging.logger import get_app_logger


class RefreshRatesUseCase:
    """Fetch fresh rates, keeping the current table on any failure."""

    def __init__(self, provider: RateProviderPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            provider: Port returning live rate tables.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._provider = provider
        self._logger = logger or get_app_logger()

    def execute(self, current: RateTable) -> RateTable:
        """Return fresh rates or ``current`` when they are unavailable.

        A fetched table must cover every currency of the current table with
        a usable rate.

        Args:
            current: Rate table in use.

        Returns:
            RateTable: The new table, or ``current`` unchanged.
        """
        fetched = self._provider.fetch_rates(current.base_currency)
        if fetched is None:
            self._logger.warning("Rate refresh failed; keeping cached rates")
            return current
        try:
            validate_rate_table(fetched, current.currencies)
        except ConversionError as exc:
            self._logger.warning(
                f"Rejected refreshed rates ({exc}); keeping cached rates"
            )
            return current
        self._logger.info(f"Rates refreshed at {fetched.timestamp}")
        return fetched


__all__ = ["RefreshRatesUseCase"]
