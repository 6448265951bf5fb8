"""Domain models for the caller identity."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Authenticated:
    """A signed-in user whose data is persisted."""

    user_id: str


@dataclass(frozen=True)
class Guest:
    """An anonymous session; nothing is persisted."""


Identity = Union[Authenticated, Guest]


def identity_from_user_id(user_id: str | None) -> Identity:
    """Return an Authenticated identity for a non-empty id, else Guest."""
    cleaned = (user_id or "").strip()
    if not cleaned:
        return Guest()
    return Authenticated(user_id=cleaned)


__all__ = ["Authenticated", "Guest", "Identity", "identity_from_user_id"]
