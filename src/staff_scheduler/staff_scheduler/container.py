from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .activities.memory_activity_repository import InMemoryActivityRepository
from .activities.service import ActivityLog
from .database.memory_store import MemoryStore
from .departments.memory_department_repository import InMemoryDepartmentRepository
from .departments.service import DepartmentService
from .messages.memory_message_repository import InMemoryMessageRepository
from .messages.service import MessageService
from .permissions.policy import PermissionEngine, PermissionTable
from .shifts.memory_shift_repository import InMemoryShiftRepository
from .shifts.service import ShiftService
from .time_off.memory_time_off_repository import InMemoryTimeOffRepository
from .time_off.service import TimeOffService
from .users.memory_user_repository import InMemoryUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    store: MemoryStore
    permissions: PermissionEngine

    users_repo: InMemoryUserRepository
    departments_repo: InMemoryDepartmentRepository
    shifts_repo: InMemoryShiftRepository
    time_off_repo: InMemoryTimeOffRepository
    activities_repo: InMemoryActivityRepository
    messages_repo: InMemoryMessageRepository

    auth_service: AuthService
    user_service: UserService
    department_service: DepartmentService
    shift_service: ShiftService
    time_off_service: TimeOffService
    activity_log: ActivityLog
    message_service: MessageService


def build_container(
    *,
    store: Optional[MemoryStore] = None,
    permission_table: Optional[PermissionTable] = None,
) -> Container:
    store = store if store is not None else MemoryStore()
    permissions = PermissionEngine(permission_table or PermissionTable.default())

    users_repo = InMemoryUserRepository(store)
    departments_repo = InMemoryDepartmentRepository(store)
    shifts_repo = InMemoryShiftRepository(store)
    time_off_repo = InMemoryTimeOffRepository(store)
    activities_repo = InMemoryActivityRepository(store)
    messages_repo = InMemoryMessageRepository(store)

    activity_log = ActivityLog(activities_repo, users_repo)
    message_service = MessageService(messages_repo, users_repo)
    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo, activity_log, shifts_repo, time_off_repo)
    department_service = DepartmentService(departments_repo, activity_log)
    shift_service = ShiftService(shifts_repo, users_repo, activity_log, message_service)
    time_off_service = TimeOffService(time_off_repo, users_repo, activity_log, store)

    return Container(
        store=store,
        permissions=permissions,
        users_repo=users_repo,
        departments_repo=departments_repo,
        shifts_repo=shifts_repo,
        time_off_repo=time_off_repo,
        activities_repo=activities_repo,
        messages_repo=messages_repo,
        auth_service=auth_service,
        user_service=user_service,
        department_service=department_service,
        shift_service=shift_service,
        time_off_service=time_off_service,
        activity_log=activity_log,
        message_service=message_service,
    )
