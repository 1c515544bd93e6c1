from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class TimeOffRequest:
    id: int
    user_id: int
    start_date: date
    end_date: date
    reason: Optional[str]
    status: RequestStatus
    created_at: datetime
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewTimeOffRequest:
    user_id: int
    start_date: date
    end_date: date
    reason: Optional[str] = None
