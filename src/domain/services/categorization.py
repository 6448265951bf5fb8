"""Domain services for quick entry parsing and category classification."""

import re
from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import FALLBACK_CATEGORY_LABEL
from src.domain.models import CategoryDef, QuickEntry

_AMOUNT_PATTERN = re.compile(r"\d+")
_KEYWORD_SEPARATORS = re.compile(r"[,，\s]+")


def classify_note(
    note: str,
    categories: Iterable[CategoryDef],
    fallback: str = FALLBACK_CATEGORY_LABEL,
) -> str:
    """Return the label of the first category whose keyword occurs in a note.

    Matching is case-insensitive substring containment, checked in category
    order.

    Args:
        note: Free-text note.
        categories: Categories to match against.
        fallback: Label used when nothing matches.

    Returns:
        str: Matched category label or the fallback.
    """
    lowered = note.lower()
    if not lowered:
        return fallback
    for category in categories:
        if any(keyword.lower() in lowered for keyword in category.keywords if keyword):
            return category.label
    return fallback


def parse_quick_entry(
    text: str,
    categories: Iterable[CategoryDef],
) -> QuickEntry | None:
    """Parse a quick entry like ``午餐 120`` into amount, note and category.

    The first run of digits is the amount; the text with every digit run
    removed is the note.

    Args:
        text: Raw user input.
        categories: Categories used for keyword classification.

    Returns:
        QuickEntry | None: Parsed entry, or None when no positive amount is
        present.
    """
    if not text:
        return None
    match = _AMOUNT_PATTERN.search(text)
    amount = Decimal(match.group(0)) if match else Decimal("0")
    if amount <= 0:
        return None

    note = _AMOUNT_PATTERN.sub("", text).strip()
    category = classify_note(note, categories)
    return QuickEntry(amount=amount, note=note or category, category=category)


def split_keywords(raw: str) -> tuple[str, ...]:
    """Split a comma or whitespace separated keyword list."""
    return tuple(part for part in _KEYWORD_SEPARATORS.split(raw or "") if part)


__all__ = ["classify_note", "parse_quick_entry", "split_keywords"]
