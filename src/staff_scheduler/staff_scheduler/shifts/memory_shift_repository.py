from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..database.memory_store import MemoryStore
from .model import NewShift, Shift
from .repository import ShiftRepository


def _day(value) -> date:
    # Day identity only: a datetime bound is cut down to its date.
    return value.date() if isinstance(value, datetime) else value


class InMemoryShiftRepository(ShiftRepository):
    def __init__(self, store: MemoryStore):
        self._table = store.shifts

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self._table.get(shift_id)

    def list_all(self) -> Sequence[Shift]:
        return self._table.list()

    def list_for_user(self, user_id: int) -> Sequence[Shift]:
        uid = int(user_id)
        return self._table.list(lambda s: s.user_id == uid)

    def list_in_range(self, *, start: date, end: date) -> Sequence[Shift]:
        first, last = _day(start), _day(end)
        return self._table.list(lambda s: first <= _day(s.date) <= last)

    def create(self, data: NewShift) -> Shift:
        return self._table.create(
            lambda shift_id: Shift(
                id=shift_id,
                user_id=int(data.user_id),
                date=_day(data.date),
                start_time=data.start_time,
                end_time=data.end_time,
                department=data.department,
                notes=data.notes,
            )
        )

    def update(self, shift_id: int, changes: Mapping[str, Any]) -> Optional[Shift]:
        return self._table.update(shift_id, changes)

    def delete(self, shift_id: int) -> bool:
        return self._table.delete(shift_id)
