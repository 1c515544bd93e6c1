from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..activities.service import ActivityLog
from ..common.datetime_utils import format_clock, format_day
from ..common.validators import optional_text, require_non_empty, require_positive_int
from ..core.enums import ActivityType, MessagePriority, MessageType
from ..core.exceptions import ValidationError
from ..core.results import SideEffects, TransactionResult
from ..messages.model import NewMessage
from ..messages.service import MessageService
from ..users.repository import UserRepository
from .model import NewShift, Shift, ShiftChanges
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


def _span(shift: Shift) -> str:
    return f"{format_clock(shift.start_time)} to {format_clock(shift.end_time)}"


class ShiftService:
    """Use case: build the schedule.

    Every successful mutation logs an activity about the shift owner; with
    ``notify=True`` the owner also gets a high priority notification.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        users: UserRepository,
        activity_log: ActivityLog,
        messages: MessageService,
    ):
        self._shifts = shifts
        self._users = users
        self._activity_log = activity_log
        self._messages = messages

    def get(self, shift_id: int) -> Optional[Shift]:
        return self._shifts.get_by_id(shift_id)

    def list_all(self) -> Sequence[Shift]:
        return self._shifts.list_all()

    def list_for_user(self, user_id: int) -> Sequence[Shift]:
        return self._shifts.list_for_user(user_id)

    def list_in_range(self, *, start: date, end: date) -> Sequence[Shift]:
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return self._shifts.list_in_range(start=start, end=end)

    def _require_owner(self, user_id) -> int:
        uid = require_positive_int(user_id, "Employee")
        if self._users.get_by_id(uid) is None:
            raise ValidationError("Employee does not exist")
        return uid

    @staticmethod
    def _check_times(start_time, end_time) -> None:
        if not start_time < end_time:
            raise ValidationError("Shift must end after it starts")

    def _effects(
        self,
        shift: Shift,
        *,
        actor_id: Optional[int],
        activity_type: ActivityType,
        describe,
        notify: bool,
        subject: str,
        content: str,
    ) -> SideEffects:
        logged = self._activity_log.record_about(
            activity_type,
            actor_id=actor_id,
            subject_id=shift.user_id,
            describe=describe,
        )
        notified = False
        if notify:
            notified = self._messages.notify(
                sender_id=actor_id,
                data=NewMessage(
                    receiver_id=shift.user_id,
                    subject=subject,
                    content=content,
                    priority=MessagePriority.HIGH,
                    message_type=MessageType.NOTIFICATION,
                ),
            )
        return SideEffects(activity=logged, notification=notified)

    def create_shift(self, *, actor_id: Optional[int], data: NewShift, notify: bool = False) -> TransactionResult[Shift]:
        self._check_times(data.start_time, data.end_time)
        shift = self._shifts.create(
            NewShift(
                user_id=self._require_owner(data.user_id),
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                department=require_non_empty(data.department, "Department"),
                notes=optional_text(data.notes, "Notes"),
            )
        )
        logger.info("shift %s created for user %s by %s", shift.id, shift.user_id, actor_id)

        day = format_day(shift.date)
        effects = self._effects(
            shift,
            actor_id=actor_id,
            activity_type=ActivityType.SHIFT_ADDED,
            describe=lambda u: f"New shift added for {u.full_name} on {day}",
            notify=notify,
            subject="New shift scheduled",
            content=f"A new shift has been scheduled for you on {day} from {_span(shift)} ({shift.department}).",
        )
        return TransactionResult(shift, effects)

    def update_shift(
        self,
        *,
        actor_id: Optional[int],
        shift_id: int,
        changes: ShiftChanges,
        notify: bool = False,
    ) -> Optional[TransactionResult[Shift]]:
        current = self._shifts.get_by_id(shift_id)
        if current is None:
            return None

        updates = changes.as_updates()
        if "user_id" in updates:
            updates["user_id"] = self._require_owner(updates["user_id"])
        if "department" in updates:
            updates["department"] = require_non_empty(updates["department"], "Department")
        if "notes" in updates:
            updates["notes"] = optional_text(updates["notes"], "Notes")
        self._check_times(updates.get("start_time", current.start_time), updates.get("end_time", current.end_time))

        shift = self._shifts.update(shift_id, updates)
        if shift is None:
            return None
        if not updates:
            return TransactionResult(shift)
        logger.info("shift %s updated by %s", shift.id, actor_id)

        day = format_day(shift.date)
        effects = self._effects(
            shift,
            actor_id=actor_id,
            activity_type=ActivityType.SHIFT_UPDATED,
            describe=lambda u: f"Shift of {u.full_name} on {day} updated",
            notify=notify,
            subject="Shift modified",
            content=f"Your shift has been modified: {day} from {_span(shift)} ({shift.department}).",
        )
        return TransactionResult(shift, effects)

    def delete_shift(self, *, actor_id: Optional[int], shift_id: int, notify: bool = False) -> Optional[TransactionResult[Shift]]:
        shift = self._shifts.get_by_id(shift_id)
        if shift is None or not self._shifts.delete(shift_id):
            return None
        logger.info("shift %s of user %s deleted by %s", shift.id, shift.user_id, actor_id)

        day = format_day(shift.date)
        effects = self._effects(
            shift,
            actor_id=actor_id,
            activity_type=ActivityType.SHIFT_DELETED,
            describe=lambda u: f"Shift of {u.full_name} on {day} removed",
            notify=notify,
            subject="Shift cancelled",
            content=f"Your shift on {day} from {_span(shift)} has been removed from the schedule.",
        )
        return TransactionResult(shift, effects)
