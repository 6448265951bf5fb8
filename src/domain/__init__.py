"""Domain package for business rules and core models."""

from .constants import BASE_CURRENCY, DEFAULT_CATEGORIES, SUPPORTED_CURRENCIES
from .errors import (
    ConversionError,
    FinanceError,
    InvalidPrice,
    InvalidRate,
    MissingReference,
    UnknownEntity,
    UnsupportedCurrency,
)
from .models import (
    Automation,
    Holding,
    PortfolioSnapshot,
    RateTable,
    SimulationResult,
    Transaction,
)
from .services import convert_amount, run_automations

__all__ = [
    "BASE_CURRENCY",
    "DEFAULT_CATEGORIES",
    "SUPPORTED_CURRENCIES",
    "ConversionError",
    "FinanceError",
    "InvalidPrice",
    "InvalidRate",
    "MissingReference",
    "UnknownEntity",
    "UnsupportedCurrency",
    "Automation",
    "Holding",
    "PortfolioSnapshot",
    "RateTable",
    "SimulationResult",
    "Transaction",
    "convert_amount",
    "run_automations",
]
