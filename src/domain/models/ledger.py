"""Domain models for ledger transactions and categories."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    """Direction of a ledger event."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one ledger event.

    The amount is always stored in the base currency and is never negative;
    the direction is carried by ``kind``.
    """

    id: str
    kind: TransactionKind
    timestamp: datetime
    amount: Decimal
    category: str
    note: str = ""
    holding_id: str | None = None
    holding_name: str | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(
                f"Transaction amount must be non-negative: {self.amount}"
            )


class CategoryIcon(str, Enum):
    """Icons a category can reference."""

    UTENSILS = "Utensils"
    FILM = "Film"
    CAR = "Car"
    SHOPPING_BAG = "ShoppingBag"
    FILE_TEXT = "FileText"
    MORE_HORIZONTAL = "MoreHorizontal"
    BRIEFCASE = "Briefcase"
    UNKNOWN = "Unknown"

    @classmethod
    def from_key(cls, key: str | None) -> "CategoryIcon":
        """Resolve a stored icon key, falling back to UNKNOWN."""
        for icon in cls:
            if icon.value == key:
                return icon
        return cls.UNKNOWN


class CategoryColor(str, Enum):
    """Color tags a category can reference."""

    ORANGE = "orange"
    PURPLE = "purple"
    BLUE = "blue"
    PINK = "pink"
    RED = "red"
    SLATE = "slate"
    EMERALD = "emerald"
    UNKNOWN = "unknown"

    @classmethod
    def from_key(cls, key: str | None) -> "CategoryColor":
        """Resolve a stored color tag, falling back to UNKNOWN."""
        for color in cls:
            if color.value == key:
                return color
        return cls.UNKNOWN


@dataclass(frozen=True)
class CategoryDef:
    """User-managed expense or income classification.

    Transactions reference categories by ``label``, which is the stable key.
    """

    id: str
    label: str
    icon: CategoryIcon = CategoryIcon.MORE_HORIZONTAL
    color: CategoryColor = CategoryColor.SLATE
    keywords: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class QuickEntry:
    """Parsed result of a free-text quick entry such as ``午餐 120``."""

    amount: Decimal
    note: str
    category: str


__all__ = [
    "TransactionKind",
    "Transaction",
    "CategoryIcon",
    "CategoryColor",
    "CategoryDef",
    "QuickEntry",
]
