from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import RequestStatus
from ..database.memory_store import MemoryStore
from .model import NewTimeOffRequest, TimeOffRequest
from .repository import TimeOffRepository


class InMemoryTimeOffRepository(TimeOffRepository):
    def __init__(self, store: MemoryStore):
        self._store = store
        self._table = store.time_off_requests

    def get_by_id(self, request_id: int) -> Optional[TimeOffRequest]:
        return self._table.get(request_id)

    def list_all(self) -> Sequence[TimeOffRequest]:
        return self._table.list()

    def list_for_user(self, user_id: int) -> Sequence[TimeOffRequest]:
        uid = int(user_id)
        return self._table.list(lambda r: r.user_id == uid)

    def list_by_status(self, status: RequestStatus) -> Sequence[TimeOffRequest]:
        return self._table.list(lambda r: r.status == status)

    def create(self, data: NewTimeOffRequest) -> TimeOffRequest:
        created_at = self._store.now()
        return self._table.create(
            lambda request_id: TimeOffRequest(
                id=request_id,
                user_id=int(data.user_id),
                start_date=data.start_date,
                end_date=data.end_date,
                reason=data.reason,
                status=RequestStatus.PENDING,
                created_at=created_at,
                reviewed_by=None,
                reviewed_at=None,
            )
        )

    def update(self, request_id: int, changes: Mapping[str, Any]) -> Optional[TimeOffRequest]:
        return self._table.update(request_id, changes)
