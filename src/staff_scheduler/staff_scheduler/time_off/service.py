from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..activities.model import NewActivity
from ..activities.service import ActivityLog
from ..common.validators import optional_text, require_positive_int
from ..core.enums import ActivityType, RequestStatus
from ..core.exceptions import InvalidTransitionError, ValidationError
from ..core.results import SideEffects, TransactionResult
from ..database.memory_store import MemoryStore
from ..users.repository import UserRepository
from .model import NewTimeOffRequest, TimeOffRequest
from .repository import TimeOffRepository

logger = logging.getLogger(__name__)

_VERBS = {
    RequestStatus.APPROVED: ("approved", ActivityType.APPROVAL),
    RequestStatus.DENIED: ("denied", ActivityType.DENIAL),
}


class TimeOffService:
    """Use case: request leave and review it.

    A request starts pending and is reviewed exactly once; approved and
    denied are terminal.
    """

    def __init__(
        self,
        requests: TimeOffRepository,
        users: UserRepository,
        activity_log: ActivityLog,
        store: MemoryStore,
    ):
        self._requests = requests
        self._users = users
        self._activity_log = activity_log
        self._store = store
        # status check and status write must not interleave between reviewers
        self._review_lock = threading.Lock()

    def get(self, request_id: int) -> Optional[TimeOffRequest]:
        return self._requests.get_by_id(request_id)

    def list_all(self) -> Sequence[TimeOffRequest]:
        return self._requests.list_all()

    def list_for_user(self, user_id: int) -> Sequence[TimeOffRequest]:
        return self._requests.list_for_user(user_id)

    def list_pending(self) -> Sequence[TimeOffRequest]:
        return self._requests.list_by_status(RequestStatus.PENDING)

    def list_by_status(self, status: RequestStatus) -> Sequence[TimeOffRequest]:
        return self._requests.list_by_status(status)

    def submit(self, data: NewTimeOffRequest) -> TimeOffRequest:
        user_id = require_positive_int(data.user_id, "Employee")
        if self._users.get_by_id(user_id) is None:
            raise ValidationError("Employee does not exist")
        if data.end_date < data.start_date:
            raise ValidationError("End date must be on or after start date")

        request = self._requests.create(
            NewTimeOffRequest(
                user_id=user_id,
                start_date=data.start_date,
                end_date=data.end_date,
                reason=optional_text(data.reason, "Reason"),
            )
        )
        logger.info("time-off request %s submitted by user %s", request.id, user_id)
        return request

    def approve(self, request_id: int, reviewer_id: int) -> Optional[TransactionResult[TimeOffRequest]]:
        return self._review(request_id, reviewer_id, RequestStatus.APPROVED)

    def deny(self, request_id: int, reviewer_id: int) -> Optional[TransactionResult[TimeOffRequest]]:
        return self._review(request_id, reviewer_id, RequestStatus.DENIED)

    def _review(self, request_id: int, reviewer_id: int, status: RequestStatus) -> Optional[TransactionResult[TimeOffRequest]]:
        with self._review_lock:
            request = self._requests.get_by_id(request_id)
            if request is None:
                return None
            if request.status != RequestStatus.PENDING:
                raise InvalidTransitionError(f"Request has already been {request.status.value}")

            updated = self._requests.update(
                request_id,
                {"status": status, "reviewed_by": int(reviewer_id), "reviewed_at": self._store.now()},
            )
        if updated is None:
            return None

        verb, activity_type = _VERBS[status]
        logger.info("time-off request %s %s by %s", updated.id, verb, reviewer_id)

        reviewer = self._users.get_by_id(reviewer_id)
        requester = self._users.get_by_id(updated.user_id)
        if reviewer is None or requester is None:
            # The review stands; only the timeline entry is skipped.
            logger.warning("no %s activity for request %s: reviewer or requester missing", activity_type.value, updated.id)
            return TransactionResult(updated, SideEffects(activity=False))

        self._activity_log.record(
            NewActivity(
                type=activity_type.value,
                description=f"Time-off request of {requester.full_name} {verb} by {reviewer.full_name}",
                user_id=reviewer.id,
                related_user_id=requester.id,
            )
        )
        return TransactionResult(updated, SideEffects(activity=True))
