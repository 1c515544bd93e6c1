from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_store import MemoryStore
from .model import Message, NewMessage
from .repository import MessageRepository


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, store: MemoryStore):
        self._store = store
        self._table = store.messages

    def get_by_id(self, message_id: int) -> Optional[Message]:
        return self._table.get(message_id)

    def list_all(self) -> Sequence[Message]:
        return self._table.list()

    def list_for_user(self, user_id: int) -> Sequence[Message]:
        uid = int(user_id)
        return self._table.list(lambda m: m.sender_id == uid or m.receiver_id == uid)

    def count_unread(self, user_id: int) -> int:
        uid = int(user_id)
        return len(self._table.list(lambda m: m.receiver_id == uid and not m.is_read))

    def create(self, *, sender_id: Optional[int], data: NewMessage) -> Message:
        created_at = self._store.now()
        return self._table.create(
            lambda message_id: Message(
                id=message_id,
                sender_id=sender_id,
                receiver_id=int(data.receiver_id),
                subject=data.subject,
                content=data.content,
                is_read=False,
                priority=data.priority,
                message_type=data.message_type,
                created_at=created_at,
            )
        )

    def mark_read(self, message_id: int) -> Optional[Message]:
        return self._table.update(message_id, {"is_read": True})
