from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..activities.model import NewActivity
from ..activities.service import ActivityLog
from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import ActivityType, RequestStatus
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.results import SideEffects, TransactionResult
from ..shifts.repository import ShiftRepository
from ..time_off.repository import TimeOffRepository
from .model import NewUser, User, UserChanges
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_by_username((username or "").strip())
        # Plain equality against the stored value; see DESIGN.md.
        if not user or user.password != password:
            logger.info("failed login for %r", username)
            raise AuthenticationError("Invalid credentials")
        return user


class UserService:
    """Use case: manage users (admin / manager)."""

    def __init__(
        self,
        users: UserRepository,
        activity_log: ActivityLog,
        shifts: ShiftRepository,
        time_off: TimeOffRepository,
    ):
        self._users = users
        self._activity_log = activity_log
        self._shifts = shifts
        self._time_off = time_off
        # username uniqueness is checked and written as one step
        self._write_lock = threading.Lock()

    def get(self, user_id: int) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def list_all(self) -> Sequence[User]:
        return self._users.list_all()

    def _clean(self, data: NewUser) -> NewUser:
        return NewUser(
            username=require_non_empty(data.username, "Username"),
            password=require_min_length(data.password, "Password", MIN_PASSWORD_LENGTH),
            first_name=require_non_empty(data.first_name, "First name"),
            last_name=require_non_empty(data.last_name, "Last name"),
            role=data.role,
            position=optional_text(data.position, "Position"),
            department=optional_text(data.department, "Department"),
            profile_image=optional_text(data.profile_image, "Profile image"),
        )

    def create_user(self, *, actor_id: Optional[int], data: NewUser) -> TransactionResult[User]:
        data = self._clean(data)
        with self._write_lock:
            if self._users.get_by_username(data.username):
                raise ValidationError("Username already exists")
            user = self._users.create(data)
        logger.info("user %s (%s) created by %s", user.id, user.username, actor_id)
        logged = self._activity_log.record_about(
            ActivityType.USER_CREATED,
            actor_id=actor_id,
            subject_id=user.id,
            describe=lambda u: f"New employee {u.full_name} added",
        )
        return TransactionResult(user, SideEffects(activity=logged))

    def update_user(self, *, actor_id: Optional[int], user_id: int, changes: UserChanges) -> Optional[TransactionResult[User]]:
        current = self._users.get_by_id(user_id)
        if current is None:
            return None

        updates = changes.as_updates()
        if "username" in updates:
            updates["username"] = require_non_empty(updates["username"], "Username")
        if "password" in updates:
            require_min_length(updates["password"], "Password", MIN_PASSWORD_LENGTH)
        for name, label in (("first_name", "First name"), ("last_name", "Last name")):
            if name in updates:
                updates[name] = require_non_empty(updates[name], label)

        with self._write_lock:
            if "username" in updates:
                other = self._users.get_by_username(updates["username"])
                if other and other.id != current.id:
                    raise ValidationError("Username already exists")
            user = self._users.update(user_id, updates)
        if user is None:
            return None
        if not updates:
            return TransactionResult(user)

        logger.info("user %s updated by %s (%s)", user.id, actor_id, ", ".join(sorted(updates)))
        logged = self._activity_log.record_about(
            ActivityType.USER_UPDATED,
            actor_id=actor_id,
            subject_id=user.id,
            describe=lambda u: f"Profile of {u.full_name} updated",
        )
        return TransactionResult(user, SideEffects(activity=logged))

    def delete_user(self, *, actor_id: Optional[int], user_id: int) -> Optional[TransactionResult[User]]:
        user = self._users.get_by_id(user_id)
        if user is None:
            return None
        if actor_id is not None and int(actor_id) == user.id:
            raise ValidationError("You cannot delete your own account")
        if self._shifts.list_for_user(user.id):
            raise ValidationError("This employee still has scheduled shifts")
        if any(r.status == RequestStatus.PENDING for r in self._time_off.list_for_user(user.id)):
            raise ValidationError("This employee still has pending time-off requests")

        if not self._users.delete_by_id(user.id):
            return None
        logger.info("user %s (%s) deleted by %s", user.id, user.username, actor_id)
        # The subject no longer resolves, so the description is rendered here.
        self._activity_log.record(
            NewActivity(
                type=ActivityType.USER_DELETED.value,
                description=f"Employee {user.full_name} removed",
                user_id=actor_id,
                related_user_id=user.id,
            )
        )
        return TransactionResult(user, SideEffects(activity=True))
