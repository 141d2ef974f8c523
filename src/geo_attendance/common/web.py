"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFound,
    PreconditionError,
    ResourceUnavailable,
    ValidationError,
)
from ..employees.service import SessionContext
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (PreconditionError, 409),
    (ResourceUnavailable, 503),
]


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return json_error(str(e), status_for(e))

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return json_error(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error")
        return json_error("Something went wrong", 500)


def store_session(ctx: SessionContext) -> None:
    session["employee_id"] = ctx.employee_id
    session["name"] = ctx.name
    session["role"] = ctx.role.value


def current_session() -> Optional[SessionContext]:
    if "employee_id" not in session:
        return None
    return SessionContext(
        employee_id=int(session["employee_id"]),
        name=session.get("name", ""),
        role=Role(session.get("role", Role.EMPLOYEE.value)),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        ctx = current_session()
        if ctx is None:
            return json_error("Please sign in to continue", 401)
        return view(ctx, *args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        ctx = current_session()
        if ctx is None:
            return json_error("Please sign in to continue", 401)
        if not ctx.is_admin:
            return json_error("You do not have permission for this action", 403)
        return view(ctx, *args, **kwargs)

    return wrapper


def date_arg(value: Optional[str], default: date) -> date:
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Dates must use YYYY-MM-DD") from None


def optional_int(value: Any) -> Optional[int]:
    if value in (None, "", "all", "none"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid id") from None
