"""Domain entity — a console user account as stored by the remote API."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """A user account.

    The credential is write-only and never part of the entity; ``id`` and
    ``created_at`` are assigned by the remote API.
    """

    id: int
    name: str
    role: str
    created_at: str
