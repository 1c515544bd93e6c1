from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import NewShift, Shift


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Shift]:
        raise NotImplementedError

    def list_in_range(self, *, start: date, end: date) -> Sequence[Shift]:
        """Shifts whose day falls within [start, end], both ends included."""

        raise NotImplementedError

    def create(self, data: NewShift) -> Shift:
        raise NotImplementedError

    def update(self, shift_id: int, changes: Mapping[str, Any]) -> Optional[Shift]:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError
