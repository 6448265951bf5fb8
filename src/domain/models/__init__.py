"""Domain models package."""

from .automation import (
    Automation,
    AutomationKind,
    LogStatus,
    SimulationResult,
    SystemLog,
)
from .finance import (
    AllocationBreakdown,
    AllocationSlice,
    DailyExpense,
    NetWorthSummary,
    PortfolioValuation,
    SectionTotal,
)
from .holdings import Holding, HoldingCategory, HoldingSection
from .identity import Authenticated, Guest, Identity, identity_from_user_id
from .ledger import (
    CategoryColor,
    CategoryDef,
    CategoryIcon,
    QuickEntry,
    Transaction,
    TransactionKind,
)
from .market import MarketHint, Quote, RateTable
from .portfolio import PortfolioSnapshot

__all__ = [
    "Automation",
    "AutomationKind",
    "LogStatus",
    "SimulationResult",
    "SystemLog",
    "AllocationBreakdown",
    "AllocationSlice",
    "DailyExpense",
    "NetWorthSummary",
    "PortfolioValuation",
    "SectionTotal",
    "Holding",
    "HoldingCategory",
    "HoldingSection",
    "Authenticated",
    "Guest",
    "Identity",
    "identity_from_user_id",
    "CategoryColor",
    "CategoryDef",
    "CategoryIcon",
    "QuickEntry",
    "Transaction",
    "TransactionKind",
    "MarketHint",
    "Quote",
    "RateTable",
    "PortfolioSnapshot",
]
