from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import NewTimeOffRequest, TimeOffRequest


class TimeOffRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[TimeOffRequest]:
        raise NotImplementedError

    def list_all(self) -> Sequence[TimeOffRequest]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[TimeOffRequest]:
        raise NotImplementedError

    def list_by_status(self, status: RequestStatus) -> Sequence[TimeOffRequest]:
        raise NotImplementedError

    def create(self, data: NewTimeOffRequest) -> TimeOffRequest:
        """Store a new request as pending and unreviewed."""

        raise NotImplementedError

    def update(self, request_id: int, changes: Mapping[str, Any]) -> Optional[TimeOffRequest]:
        raise NotImplementedError
