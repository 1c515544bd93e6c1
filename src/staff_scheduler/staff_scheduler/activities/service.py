from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import ActivityType
from ..users.repository import UserRepository
from .model import Activity, NewActivity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)


class ActivityLog:
    """Use case: append to and read the activity timeline."""

    def __init__(self, activities: ActivityRepository, users: UserRepository):
        self._activities = activities
        self._users = users

    def record(self, data: NewActivity) -> Activity:
        data = NewActivity(
            type=require_non_empty(data.type, "Activity type"),
            description=require_non_empty(data.description, "Description"),
            user_id=data.user_id,
            related_user_id=data.related_user_id,
        )
        activity = self._activities.create(data)
        logger.debug("activity %s recorded (%s)", activity.id, activity.type)
        return activity

    def record_about(
        self,
        activity_type: ActivityType,
        *,
        actor_id: Optional[int],
        subject_id: int,
        describe,
    ) -> bool:
        """Record an activity about ``subject_id`` if that user still exists.

        ``describe`` receives the resolved subject ``User`` and returns the
        description. Returns whether an activity was written.
        """
        subject = self._users.get_by_id(subject_id)
        if subject is None:
            logger.warning("skipping %s activity: user %s not found", activity_type.value, subject_id)
            return False
        self.record(
            NewActivity(
                type=activity_type.value,
                description=describe(subject),
                user_id=actor_id,
                related_user_id=subject_id,
            )
        )
        return True

    def recent(self, limit: Optional[int] = None) -> Sequence[Activity]:
        return self._activities.list_recent(limit)

    def get(self, activity_id: int) -> Optional[Activity]:
        return self._activities.get_by_id(activity_id)

