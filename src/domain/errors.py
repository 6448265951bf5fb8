"""Domain exceptions for currency conversion and holding lookups."""


class FinanceError(Exception):
    """Base class for domain errors."""


class ConversionError(FinanceError):
    """Raised when an amount cannot be converted between currencies."""


class UnsupportedCurrency(ConversionError):
    """Raised when a currency is absent from the rate table."""

    def __init__(self, currency: str) -> None:
        super().__init__(f"Unsupported currency: {currency}")
        self.currency = currency


class InvalidRate(ConversionError):
    """Raised when a rate is missing, zero, negative or not numeric."""

    def __init__(self, currency: str, rate: object) -> None:
        super().__init__(f"Invalid rate for {currency}: {rate!r}")
        self.currency = currency
        self.rate = rate


class MissingReference(FinanceError):
    """Raised when a rule references a holding that does not exist."""

    def __init__(self, holding_id: str | None, role: str = "holding") -> None:
        super().__init__(f"Missing {role}: {holding_id}")
        self.holding_id = holding_id
        self.role = role


class InvalidPrice(FinanceError):
    """Raised when a holding has no usable unit price."""

    def __init__(self, holding_id: str, price: object) -> None:
        super().__init__(f"Invalid unit price for {holding_id}: {price}")
        self.holding_id = holding_id
        self.price = price


class UnknownEntity(FinanceError):
    """Raised when a use case is asked to act on an id it cannot find."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"Unknown {kind}: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


__all__ = [
    "FinanceError",
    "ConversionError",
    "UnsupportedCurrency",
    "InvalidRate",
    "MissingReference",
    "InvalidPrice",
    "UnknownEntity",
]
