"""Domain validation helpers."""

from logging import Logger

from src.domain.models.holdings import Holding, HoldingCategory

LIABILITY_CATEGORIES = (HoldingCategory.CREDIT_CARD,)


def validate_holding(holding: Holding, logger: Logger) -> None:
    """Reject malformed holdings and warn on unusual sign conventions.

    Args:
        holding: Holding to check.
        logger: Logger used for warnings.

    Raises:
        ValueError: The holding has no currency or an out-of-range
            billing day.
    """
    if not holding.currency:
        raise ValueError(f"Holding {holding.id} has no currency")
    if holding.bill_day is not None:
        if holding.category not in LIABILITY_CATEGORIES:
            logger.warning(
                f"Billing day set on non credit card holding {holding.id}"
            )
        if not 1 <= holding.bill_day <= 31:
            raise ValueError(
                f"Billing day must be within 1-31 for holding {holding.id}: "
                f"{holding.bill_day}"
            )
    validate_quantity_sign(holding, logger)


def validate_quantity_sign(holding: Holding, logger: Logger) -> None:
    """Warn when a quantity violates expected sign conventions.

    Args:
        holding: Holding to check.
        logger: Logger used for warnings.
    """
    if holding.category in LIABILITY_CATEGORIES and holding.quantity > 0:
        logger.warning(
            f"Liability balance is positive for holding={holding.id}: "
            f"{holding.quantity}"
        )
    if holding.category not in LIABILITY_CATEGORIES and holding.quantity < 0:
        logger.warning(
            f"Asset balance is negative for holding={holding.id}: "
            f"{holding.quantity}"
        )


__all__ = ["validate_holding", "validate_quantity_sign"]
