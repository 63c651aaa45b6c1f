"""Identity recovered from a validated access token, plus the ``User`` re-export."""

from __future__ import annotations

from dataclasses import dataclass

from database.models import User

__all__ = ["Identity", "User"]


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str
