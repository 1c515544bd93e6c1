from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import NewUser, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: services depend on this interface, never on a concrete store.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create(self, data: NewUser) -> User:
        raise NotImplementedError

    def update(self, user_id: int, changes: Mapping[str, Any]) -> Optional[User]:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
