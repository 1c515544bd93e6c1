from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty, require_positive_int
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import Message, NewMessage
from .repository import MessageRepository

logger = logging.getLogger(__name__)


class MessageService:
    """Use case: internal messaging and system notifications."""

    def __init__(self, messages: MessageRepository, users: UserRepository):
        self._messages = messages
        self._users = users

    def send(self, *, sender_id: Optional[int], data: NewMessage) -> Message:
        receiver_id = require_positive_int(data.receiver_id, "Receiver")
        if self._users.get_by_id(receiver_id) is None:
            raise ValidationError("Receiver does not exist")

        message = self._messages.create(
            sender_id=sender_id,
            data=NewMessage(
                receiver_id=receiver_id,
                content=require_non_empty(data.content, "Content"),
                subject=optional_text(data.subject, "Subject"),
                priority=data.priority,
                message_type=data.message_type,
            ),
        )
        logger.info("message %s sent from %s to %s", message.id, sender_id, receiver_id)
        return message

    def notify(self, *, sender_id: Optional[int], data: NewMessage) -> bool:
        """Best-effort variant of ``send`` used by other services.

        Returns False instead of raising when the receiver is gone.
        """
        if self._users.get_by_id(data.receiver_id) is None:
            logger.warning("skipping notification: user %s not found", data.receiver_id)
            return False
        self._messages.create(sender_id=sender_id, data=data)
        return True

    def get(self, message_id: int) -> Optional[Message]:
        return self._messages.get_by_id(message_id)

    def list_all(self) -> Sequence[Message]:
        return self._messages.list_all()

    def inbox(self, user_id: int) -> Sequence[Message]:
        return self._messages.list_for_user(user_id)

    def unread_count(self, user_id: int) -> int:
        return self._messages.count_unread(user_id)

    def mark_read(self, message_id: int) -> Optional[Message]:
        return self._messages.mark_read(message_id)
