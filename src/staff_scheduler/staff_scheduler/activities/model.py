from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Activity:
    """One line of the audit timeline. Never edited once written."""

    id: int
    type: str
    description: str
    user_id: Optional[int]
    related_user_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class NewActivity:
    type: str
    description: str
    user_id: Optional[int] = None
    related_user_id: Optional[int] = None
