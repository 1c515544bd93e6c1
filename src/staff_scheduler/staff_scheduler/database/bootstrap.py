"""Demo organisation loaded at startup when SEED_DEMO_DATA is on."""
from __future__ import annotations

import logging
from datetime import date, time, timedelta
from typing import Dict, Optional

from ..activities.model import NewActivity
from ..core.enums import ActivityType, Role
from ..departments.model import NewDepartment
from ..shifts.model import NewShift
from ..time_off.model import NewTimeOffRequest
from ..users.model import NewUser

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_DEPARTMENTS = (
    ("Service", "#67e8f9"),
    ("Cuisine", "#a3e635"),
    ("Réception", "#818cf8"),
    ("Administration", "#fb923c"),
)

DEMO_USERS = (
    # username, first, last, role, department, position, photo
    ("admin", "Thomas", "Martin", Role.ADMIN, "Administration", "Gestionnaire",
     "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?auto=format&fit=facearea&facepad=2&w=256&h=256&q=80"),
    ("sophie", "Sophie", "Martin", Role.EMPLOYEE, "Service", "Service",
     "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?auto=format&fit=facearea&facepad=2&w=256&h=256&q=80"),
    ("alex", "Alex", "Dubois", Role.EMPLOYEE, "Cuisine", "Cuisine",
     "https://images.unsplash.com/photo-1599566150163-29194dcaad36?auto=format&fit=facearea&facepad=2&w=256&h=256&q=80"),
    ("julie", "Julie", "Moreau", Role.EMPLOYEE, "Réception", "Réception",
     "https://images.unsplash.com/photo-1494790108377-be9c29b29330?auto=format&fit=facearea&facepad=2&w=256&h=256&q=80"),
)

# username, days after Monday, start hour, end hour, department
DEMO_SHIFTS = (
    ("sophie", 0, 9, 17, "Service"),
    ("sophie", 2, 13, 21, "Service"),
    ("sophie", 4, 10, 18, "Service"),
    ("alex", 1, 8, 16, "Cuisine"),
    ("alex", 2, 8, 16, "Cuisine"),
    ("alex", 3, 8, 16, "Cuisine"),
    ("alex", 5, 11, 19, "Cuisine"),
    ("julie", 3, 14, 22, "Réception"),
    ("julie", 4, 14, 22, "Réception"),
    ("julie", 5, 12, 20, "Réception"),
)

# username, days from today (start, end), reason
DEMO_TIME_OFF = (
    ("julie", 7, 8, "Personal leave"),
    ("alex", 4, 4, "Shift swap request with Sophie"),
    ("sophie", 5, 5, "Medical appointment"),
)

# type, description, actor, subject
DEMO_ACTIVITIES = (
    (ActivityType.APPROVAL.value, "Time-off request approved", "admin", "sophie"),
    (ActivityType.SHIFT_ADDED.value, "New shift added", "admin", "alex"),
    ("shift_swap", "Shift swap", "julie", "sophie"),
    (ActivityType.DENIAL.value, "Time-off request denied", "admin", "alex"),
    ("late", "Late clock-in", None, "sophie"),
)


def seed_demo_data(container, *, today: Optional[date] = None) -> Dict[str, int]:
    """Load the demo organisation; returns the user ids by username."""
    today = today or container.store.now().date()
    monday = today - timedelta(days=today.weekday())

    for name, color in DEMO_DEPARTMENTS:
        container.departments_repo.create(NewDepartment(name=name, color=color))

    user_ids: Dict[str, int] = {}
    for username, first, last, role, dept, position, photo in DEMO_USERS:
        user = container.users_repo.create(
            NewUser(
                username=username,
                password=DEMO_PASSWORD,
                first_name=first,
                last_name=last,
                role=role,
                position=position,
                department=dept,
                profile_image=photo,
            )
        )
        user_ids[username] = user.id

    for username, offset, start_h, end_h, dept in DEMO_SHIFTS:
        container.shifts_repo.create(
            NewShift(
                user_id=user_ids[username],
                date=monday + timedelta(days=offset),
                start_time=time(start_h),
                end_time=time(end_h),
                department=dept,
                notes="",
            )
        )

    for username, start, end, reason in DEMO_TIME_OFF:
        container.time_off_repo.create(
            NewTimeOffRequest(
                user_id=user_ids[username],
                start_date=today + timedelta(days=start),
                end_date=today + timedelta(days=end),
                reason=reason,
            )
        )

    for activity_type, description, actor, subject in DEMO_ACTIVITIES:
        container.activity_log.record(
            NewActivity(
                type=activity_type,
                description=description,
                user_id=user_ids[actor] if actor else None,
                related_user_id=user_ids[subject],
            )
        )

    logger.info(
        "demo data ready: %d users, %d shifts, week of %s",
        len(user_ids),
        len(DEMO_SHIFTS),
        monday.isoformat(),
    )
    return user_ids
