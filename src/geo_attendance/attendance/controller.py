from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import click
from flask import Flask, jsonify, request

from ..common.web import login_required
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ValidationError
from ..geo.provider import SubmittedLocationProvider
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


def record_to_dict(record: Optional[AttendanceRecord]) -> Optional[dict]:
    if record is None:
        return None
    return {
        "id": record.attendance_id,
        "employee_id": record.employee_id,
        "work_date": record.work_date.isoformat(),
        "state": record.state.value,
        "check_in_time": record.check_in_time.isoformat() if record.check_in_time else None,
        "check_in_location": record.check_in_location.to_dict() if record.check_in_location else None,
        "check_in_selfie_url": record.check_in_photo_ref,
        "check_out_time": record.check_out_time.isoformat() if record.check_out_time else None,
        "check_out_location": record.check_out_location.to_dict() if record.check_out_location else None,
        "check_out_selfie_url": record.check_out_photo_ref,
        "total_hours": record.total_hours,
        "overtime_hours": record.overtime_hours,
        "auto_checked_out": record.auto_checked_out,
    }


def _selfie_bytes() -> bytes:
    upload = request.files.get("selfie")
    if upload is None:
        raise ValidationError("A selfie is required")
    return upload.read()


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today(ctx):
        today_ = date.today()
        record = container.attendance_service.get_today_record(ctx.employee_id, today_)
        return jsonify(
            {
                "success": True,
                "state": container.attendance_service.session_state(ctx.employee_id, today_).value,
                "record": record_to_dict(record),
            }
        )

    @app.route("/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin(ctx):
        record = container.capture_service.capture_check_in(
            ctx,
            locator=SubmittedLocationProvider(request.form),
            photo=_selfie_bytes(),
        )
        return jsonify({"success": True, "message": "Checked in successfully", "record": record_to_dict(record)}), 201

    @app.route("/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout(ctx):
        record = container.capture_service.capture_check_out(
            ctx,
            locator=SubmittedLocationProvider(request.form),
            photo=_selfie_bytes(),
        )
        message = f"Total: {record.total_hours:.1f}h"
        if record.overtime_hours:
            message += f" | OT: {record.overtime_hours:.1f}h"
        return jsonify({"success": True, "message": message, "record": record_to_dict(record)})

    @app.route("/attendance/auto-checkout", methods=["POST"], endpoint="auto_checkout")
    @login_required
    def auto_checkout(ctx):
        """Periodic tick from an open session screen; a no-op until the cap is crossed."""
        locator = SubmittedLocationProvider(request.form) if request.form else None
        record = container.attendance_service.auto_checkout(ctx.employee_id, locator=locator)
        return jsonify({"success": True, "closed": record is not None, "record": record_to_dict(record)})

    @app.route("/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history(ctx):
        limit = request.args.get("limit", type=int) or DEFAULT_HISTORY_LIMIT
        rows = container.attendance_service.get_history(ctx.employee_id, limit=limit)
        return jsonify({"success": True, "records": [record_to_dict(r) for r in rows]})

    @app.cli.command("auto-checkout")
    def auto_checkout_command():
        """Close every session open longer than the auto-checkout cap."""
        closed = container.attendance_service.auto_checkout_overdue()
        for record in closed:
            click.echo(f"closed attendance {record.attendance_id} (employee {record.employee_id})")
        logger.info("Auto checkout sweep closed %d session(s)", len(closed))
