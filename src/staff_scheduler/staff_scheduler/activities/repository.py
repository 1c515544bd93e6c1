from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Activity, NewActivity


class ActivityRepository(Protocol):
    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        raise NotImplementedError

    def list_recent(self, limit: Optional[int] = None) -> Sequence[Activity]:
        """Newest first; equal timestamps put the higher id first."""

        raise NotImplementedError

    def create(self, data: NewActivity) -> Activity:
        raise NotImplementedError
