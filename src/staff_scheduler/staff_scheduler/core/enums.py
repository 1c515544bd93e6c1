from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorisation."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class RequestStatus(str, Enum):
    """Review state of a time-off request."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class MessagePriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class MessageType(str, Enum):
    MESSAGE = "message"
    NOTIFICATION = "notification"


class ActivityType(str, Enum):
    """Tags written by the domain services.

    Activity.type stays a free-form string; these are only the values
    this codebase produces itself.
    """

    APPROVAL = "approval"
    DENIAL = "denial"
    SHIFT_ADDED = "shift_added"
    SHIFT_UPDATED = "shift_updated"
    SHIFT_DELETED = "shift_deleted"
    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"
    USER_DELETED = "user_deleted"
    DEPARTMENT_CREATED = "department_created"
    DEPARTMENT_UPDATED = "department_updated"
    DEPARTMENT_DELETED = "department_deleted"
