from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import MessagePriority, MessageType


@dataclass(frozen=True)
class Message:
    """Internal message. ``sender_id`` is None for system notifications."""

    id: int
    sender_id: Optional[int]
    receiver_id: int
    subject: Optional[str]
    content: str
    is_read: bool
    priority: MessagePriority
    message_type: MessageType
    created_at: datetime


@dataclass(frozen=True)
class NewMessage:
    receiver_id: int
    content: str
    subject: Optional[str] = None
    priority: MessagePriority = MessagePriority.NORMAL
    message_type: MessageType = MessageType.MESSAGE
