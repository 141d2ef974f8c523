from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, login_required, optional_int, store_session
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import Employee


def employee_to_dict(employee: Employee) -> dict:
    return {
        "id": employee.employee_id,
        "employee_id": employee.employee_code,
        "name": employee.name,
        "dob": employee.date_of_birth.isoformat() if employee.date_of_birth else None,
        "phone": employee.phone,
        "role": employee.role.value,
        "work_station_id": employee.work_station_id,
        "work_location": employee.work_location.to_dict() if employee.work_location else None,
        "created_at": employee.created_at.isoformat() if employee.created_at else None,
    }


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def _dob(value) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Date of birth must use YYYY-MM-DD") from None


def _role(value) -> Role:
    try:
        return Role(value or Role.EMPLOYEE.value)
    except ValueError:
        raise ValidationError("Unknown role") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = _payload()
        ctx = container.auth_service.authenticate(data.get("employee_id", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)
        store_session(ctx)

        return jsonify({"success": True, "name": ctx.name, "role": ctx.role.value})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me(ctx):
        return jsonify({"success": True, "employee": employee_to_dict(container.employee_service.get(ctx.employee_id))})

    @app.route("/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def list_employees(ctx):
        role = request.args.get("role")
        employees = container.employee_service.list_employees(role=_role(role) if role else None)
        return jsonify({"success": True, "employees": [employee_to_dict(e) for e in employees]})

    @app.route("/admin/employees", methods=["POST"], endpoint="admin_create_employee")
    @admin_required
    def create_employee(ctx):
        data = _payload()
        employee_id = container.employee_service.create(
            ctx,
            employee_code=data.get("employee_id", ""),
            name=data.get("name", ""),
            password=data.get("password", ""),
            date_of_birth=_dob(data.get("dob")),
            phone=data.get("phone"),
            role=_role(data.get("role")),
            work_station_id=optional_int(data.get("work_station_id")),
        )
        employee = container.employee_service.get(employee_id)
        return jsonify({"success": True, "employee": employee_to_dict(employee)}), 201

    @app.route("/admin/employees/<int:employee_id>", methods=["PUT"], endpoint="admin_update_employee")
    @admin_required
    def update_employee(ctx, employee_id: int):
        data = _payload()
        current = container.employee_service.get(employee_id)
        # Keys left out of the payload keep their current values.
        employee = container.employee_service.update(
            ctx,
            employee_id=employee_id,
            name=data.get("name", current.name),
            date_of_birth=_dob(data["dob"]) if "dob" in data else current.date_of_birth,
            phone=data.get("phone", current.phone),
            work_station_id=(
                optional_int(data["work_station_id"]) if "work_station_id" in data else current.work_station_id
            ),
        )
        return jsonify({"success": True, "employee": employee_to_dict(employee)})

    @app.route("/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="admin_delete_employee")
    @admin_required
    def delete_employee(ctx, employee_id: int):
        container.employee_service.delete(ctx, employee_id=employee_id)
        return jsonify({"success": True, "message": "Employee and attendance records deleted"})

