"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, HTTP payloads or callers.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_whole(value: Decimal) -> Decimal:
    """Round a Decimal to zero decimal places, halves away from zero.

    Args:
        value: Amount to round.

    Returns:
        Decimal: Rounded amount.
    """
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


__all__ = ["coerce_decimal", "round_whole"]
