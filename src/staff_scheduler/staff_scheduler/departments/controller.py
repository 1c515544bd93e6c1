from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_payload, to_payloads
from ..common.web import Guards, json_body, not_found
from ..container import Container
from ..core.exceptions import ValidationError
from ..permissions.policy import Capability
from .model import DepartmentChanges, NewDepartment


def _parse_changes(body: dict) -> DepartmentChanges:
    values = {}
    for key in ("name", "color"):
        if key in body:
            if not isinstance(body[key], str):
                raise ValidationError(f"{key} must be text")
            values[key] = body[key]
    return DepartmentChanges(**values)


def register(app: Flask, container: Container) -> None:
    guards = Guards(container)

    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    @guards.require(Capability.VIEW_DEPARTMENTS)
    def list_departments():
        return jsonify(to_payloads(container.department_service.list_all()))

    @app.route("/api/departments/<int:dept_id>", methods=["GET"], endpoint="get_department")
    @guards.require(Capability.VIEW_DEPARTMENTS)
    def get_department(dept_id: int):
        dept = container.department_service.get(dept_id)
        if dept is None:
            return not_found("Department")
        return jsonify(to_payload(dept))

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    @guards.require(Capability.CREATE_DEPARTMENT)
    def create_department():
        body = json_body()
        result = container.department_service.create(
            actor_id=guards.current_user().id,
            data=NewDepartment(name=body.get("name") or "", color=body.get("color") or ""),
        )
        return jsonify(to_payload(result.value)), 201

    @app.route("/api/departments/<int:dept_id>", methods=["PUT", "PATCH"], endpoint="update_department")
    @guards.require(Capability.EDIT_DEPARTMENT)
    def update_department(dept_id: int):
        result = container.department_service.update(
            actor_id=guards.current_user().id,
            dept_id=dept_id,
            changes=_parse_changes(json_body()),
        )
        if result is None:
            return not_found("Department")
        return jsonify(to_payload(result.value))

    @app.route("/api/departments/<int:dept_id>", methods=["DELETE"], endpoint="delete_department")
    @guards.require(Capability.DELETE_DEPARTMENT)
    def delete_department(dept_id: int):
        result = container.department_service.delete(actor_id=guards.current_user().id, dept_id=dept_id)
        if result is None:
            return not_found("Department")
        return "", 204
