"""Helpers shared by the Flask controllers."""
from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Optional

from flask import g, jsonify, request, session

from ..core.exceptions import AuthenticationError, ValidationError
from ..permissions.policy import Capability


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def parse_int_arg(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name} format")


def not_found(label: str):
    return jsonify({"message": f"{label} not found"}), 404


class Guards:
    """Authentication and permission decorators bound to one container."""

    def __init__(self, container):
        self._container = container

    def current_user(self):
        if "current_user" not in g:
            user_id = session.get("user_id")
            g.current_user = self._container.users_repo.get_by_id(user_id) if user_id else None
        return g.current_user

    def require_user(self):
        user = self.current_user()
        if user is None:
            # a deleted account invalidates its session
            session.pop("user_id", None)
            raise AuthenticationError("Authentication required")
        return user

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            self.require_user()
            return view(*args, **kwargs)

        return wrapper

    def require(self, capability: Capability, owner_of: Optional[Callable[..., Optional[int]]] = None):
        """Deny the view unless the current user holds ``capability``.

        Permission is checked before the view looks anything up. ``owner_of``
        gets the view kwargs and returns the owner of the target resource,
        for the own-resource exception.
        """

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                user = self.require_user()
                owner_id = None
                if owner_of is not None and not self._container.permissions.authorize(user, capability):
                    owner_id = owner_of(**kwargs)
                self._container.permissions.require(user, capability, owner_id)
                return view(*args, **kwargs)

            return wrapper

        return decorator
