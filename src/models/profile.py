# src/models/profile.py

"""Profile model: one row per signed-in identity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Role = Literal["user", "seller"]


@dataclass
class Profile:
    """Role and email attached to a session identity."""

    id: str
    email: str
    role: Role = "user"
    created_at: datetime | None = None

    @property
    def is_seller(self) -> bool:
        """True when the profile may manage listings."""
        return self.role == "seller"
