from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..activities.model import NewActivity
from ..activities.service import ActivityLog
from ..common.validators import require_non_empty
from ..core.enums import ActivityType
from ..core.exceptions import ValidationError
from ..core.results import SideEffects, TransactionResult
from .model import Department, DepartmentChanges, NewDepartment
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, activity_log: ActivityLog):
        self._departments = departments
        self._activity_log = activity_log
        self._write_lock = threading.Lock()

    def get(self, dept_id: int) -> Optional[Department]:
        return self._departments.get_by_id(dept_id)

    def list_all(self) -> Sequence[Department]:
        return self._departments.list_all()

    def _log(self, activity_type: ActivityType, actor_id: Optional[int], description: str) -> SideEffects:
        self._activity_log.record(NewActivity(type=activity_type.value, description=description, user_id=actor_id))
        return SideEffects(activity=True)

    def create(self, *, actor_id: Optional[int], data: NewDepartment) -> TransactionResult[Department]:
        name = require_non_empty(data.name, "Department name")
        color = require_non_empty(data.color, "Color")
        with self._write_lock:
            if self._departments.get_by_name(name):
                raise ValidationError("Department already exists")
            dept = self._departments.create(NewDepartment(name=name, color=color))
        logger.info("department %s (%s) created by %s", dept.id, dept.name, actor_id)
        return TransactionResult(dept, self._log(ActivityType.DEPARTMENT_CREATED, actor_id, f"Department {dept.name} created"))

    def update(self, *, actor_id: Optional[int], dept_id: int, changes: DepartmentChanges) -> Optional[TransactionResult[Department]]:
        current = self._departments.get_by_id(dept_id)
        if current is None:
            return None

        updates = changes.as_updates()
        if "name" in updates:
            updates["name"] = require_non_empty(updates["name"], "Department name")
        if "color" in updates:
            updates["color"] = require_non_empty(updates["color"], "Color")

        with self._write_lock:
            if "name" in updates:
                other = self._departments.get_by_name(updates["name"])
                if other and other.id != current.id:
                    raise ValidationError("Department already exists")
            dept = self._departments.update(dept_id, updates)
        if dept is None:
            return None
        if not updates:
            return TransactionResult(dept)

        if dept.name != current.name:
            description = f"Department {current.name} renamed to {dept.name}"
        else:
            description = f"Department {dept.name} updated"
        logger.info("department %s updated by %s", dept.id, actor_id)
        return TransactionResult(dept, self._log(ActivityType.DEPARTMENT_UPDATED, actor_id, description))

    def delete(self, *, actor_id: Optional[int], dept_id: int) -> Optional[TransactionResult[Department]]:
        dept = self._departments.get_by_id(dept_id)
        if dept is None or not self._departments.delete(dept_id):
            return None
        logger.info("department %s (%s) deleted by %s", dept.id, dept.name, actor_id)
        return TransactionResult(dept, self._log(ActivityType.DEPARTMENT_DELETED, actor_id, f"Department {dept.name} deleted"))
