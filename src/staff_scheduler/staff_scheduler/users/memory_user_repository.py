from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.memory_store import MemoryStore
from .model import NewUser, User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: MemoryStore):
        self._table = store.users

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._table.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for user in self._table.list():
            if user.username == username:
                return user
        return None

    def list_all(self) -> Sequence[User]:
        return self._table.list()

    def create(self, data: NewUser) -> User:
        return self._table.create(
            lambda user_id: User(
                id=user_id,
                username=data.username,
                password=data.password,
                first_name=data.first_name,
                last_name=data.last_name,
                role=data.role,
                position=data.position,
                department=data.department,
                profile_image=data.profile_image,
            )
        )

    def update(self, user_id: int, changes: Mapping[str, Any]) -> Optional[User]:
        return self._table.update(user_id, changes)

    def delete_by_id(self, user_id: int) -> bool:
        return self._table.delete(user_id)
