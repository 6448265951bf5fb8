"""Port for fetching exchange rates."""

from typing import Protocol

from src.domain.models import RateTable


class RateProviderPort(Protocol):
    """Port exposing live exchange rates anchored to a base currency."""

    def fetch_rates(self, base_currency: str) -> RateTable | None:
        """Return fresh rates, or None when they cannot be fetched."""


__all__ = ["RateProviderPort"]
