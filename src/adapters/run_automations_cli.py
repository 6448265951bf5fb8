"""CLI adapter to run one automation simulation pass.

This module wires the load, rate refresh and run-automations use cases to
the concrete adapters and prints a summary of the pass.
"""

from src.application.use_cases.load_portfolio import LoadPortfolioUseCase
from src.application.use_cases.refresh_rates import RefreshRatesUseCase
from src.application.use_cases.run_automations import RunAutomationsUseCase
from src.domain.models import Authenticated, LogStatus
from src.infrastructure.container import (
    build_identity,
    build_market_data_client,
    build_portfolio_repository,
    build_seed_rates,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run every active automation rule once."""
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
    finally:
        client.close()

    result = RunAutomationsUseCase(repository, logger=logger).execute(
        identity,
        snapshot,
        rates,
    )
    simulation = result.simulation

    for entry in simulation.logs:
        print(f"[{entry.status.value}] {entry.title}: {entry.description}")
    print(
        f"Automation pass finished: "
        f"{simulation.count(LogStatus.SUCCESS)} succeeded, "
        f"{simulation.count(LogStatus.FAILED)} failed, "
        f"{simulation.count(LogStatus.SKIPPED)} skipped."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
