from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Message, NewMessage


class MessageRepository(Protocol):
    def get_by_id(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Message]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Message]:
        """Messages the user sent or received."""

        raise NotImplementedError

    def count_unread(self, user_id: int) -> int:
        raise NotImplementedError

    def create(self, *, sender_id: Optional[int], data: NewMessage) -> Message:
        raise NotImplementedError

    def mark_read(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError
