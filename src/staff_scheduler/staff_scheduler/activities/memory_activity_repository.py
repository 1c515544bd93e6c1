from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_store import MemoryStore
from .model import Activity, NewActivity
from .repository import ActivityRepository


class InMemoryActivityRepository(ActivityRepository):
    def __init__(self, store: MemoryStore):
        self._store = store
        self._table = store.activities

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        return self._table.get(activity_id)

    def list_recent(self, limit: Optional[int] = None) -> Sequence[Activity]:
        items = sorted(self._table.list(), key=lambda a: (a.created_at, a.id), reverse=True)
        if limit is None:
            return items
        return items[: max(int(limit), 0)]

    def create(self, data: NewActivity) -> Activity:
        created_at = self._store.now()
        return self._table.create(
            lambda activity_id: Activity(
                id=activity_id,
                type=data.type,
                description=data.description,
                user_id=data.user_id,
                related_user_id=data.related_user_id,
                created_at=created_at,
            )
        )
