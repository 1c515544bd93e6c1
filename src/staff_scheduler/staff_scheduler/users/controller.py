from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.serialization import to_payload, to_payloads
from ..common.validators import optional_text, require_choice
from ..common.web import Guards, json_body, not_found
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS, UNSET
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..permissions.policy import Capability, outranks
from .model import NewUser, UserChanges

_PRIVATE = ("password",)

# changing these on another account hands that account over
_CREDENTIALS = ("username", "password")

_FIELDS = {
    "username": "username",
    "password": "password",
    "firstName": "first_name",
    "lastName": "last_name",
    "position": "position",
    "department": "department",
    "profileImage": "profile_image",
}


def _user_json(user):
    return to_payload(user, exclude=_PRIVATE)


def _parse_changes(body: dict) -> UserChanges:
    values = {}
    for key, attr in _FIELDS.items():
        if key in body:
            value = body[key]
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{key} must be text")
            values[attr] = value
    if "role" in body:
        values["role"] = require_choice(body["role"], Role, "role")
    return UserChanges(**values)


def _parse_new_user(body: dict) -> NewUser:
    changes = _parse_changes(body)
    return NewUser(
        username=changes.username or "",
        password=changes.password or "",
        first_name=changes.first_name or "",
        last_name=changes.last_name or "",
        role=Role.EMPLOYEE if changes.role is UNSET else changes.role,
        position=optional_text(changes.position or None, "position"),
        department=optional_text(changes.department or None, "department"),
        profile_image=optional_text(changes.profile_image or None, "profileImage"),
    )


def register(app: Flask, container: Container) -> None:
    guards = Guards(container)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        username = body.get("username")
        password = body.get("password")
        if not username or not password:
            return jsonify({"message": "Username and password are required"}), 400

        user = container.auth_service.authenticate(str(username), str(password))

        session.clear()
        session.permanent = bool(body.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = user.id
        return jsonify({"user": _user_json(user)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return "", 204

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @guards.login_required
    def me():
        return jsonify(_user_json(guards.current_user()))

    @app.route("/api/permissions", methods=["GET"], endpoint="my_permissions")
    @guards.login_required
    def my_permissions():
        user = guards.current_user()
        return jsonify({"role": user.role.value, "permissions": container.permissions.capabilities_for(user.role)})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @guards.require(Capability.VIEW_USERS)
    def list_users():
        return jsonify(to_payloads(container.user_service.list_all(), exclude=_PRIVATE))

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    @guards.require(Capability.VIEW_USERS)
    def get_user(user_id: int):
        user = container.user_service.get(user_id)
        if user is None:
            return not_found("User")
        return jsonify(_user_json(user))

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @guards.require(Capability.CREATE_USER)
    def create_user():
        result = container.user_service.create_user(
            actor_id=guards.current_user().id,
            data=_parse_new_user(json_body()),
        )
        return jsonify(_user_json(result.value)), 201

    @app.route("/api/users/<int:user_id>", methods=["PUT", "PATCH"], endpoint="update_user")
    @guards.require(Capability.EDIT_USER)
    def update_user(user_id: int):
        actor = guards.current_user()
        body = json_body()
        target = container.user_service.get(user_id)
        if target is None:
            return not_found("User")

        # roles, other people's credentials and higher ranked accounts are
        # reserved to account creators
        hands_over = target.id != actor.id and any(key in body for key in _CREDENTIALS)
        if "role" in body or hands_over or outranks(target.role, actor.role):
            container.permissions.require(actor, Capability.CREATE_USER)

        result = container.user_service.update_user(
            actor_id=actor.id,
            user_id=user_id,
            changes=_parse_changes(body),
        )
        if result is None:
            return not_found("User")
        return jsonify(_user_json(result.value))

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @guards.require(Capability.DELETE_USER)
    def delete_user(user_id: int):
        result = container.user_service.delete_user(actor_id=guards.current_user().id, user_id=user_id)
        if result is None:
            return not_found("User")
        return "", 204
