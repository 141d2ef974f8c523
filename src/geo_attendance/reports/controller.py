from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify, request

from ..common.web import admin_required, date_arg, login_required, optional_int
from ..container import Container
from ..core.exceptions import ValidationError
from .export import report_filename, write_report_csv
from .service import ReportData


def _report_json(data: ReportData) -> dict:
    return {
        "success": True,
        "rows": data.rows,
        "summary": asdict(data.summary),
        "by_employee": data.by_employee,
        "by_day": data.by_day,
    }


def register(app: Flask, container: Container) -> None:
    def build_report(*, employee_id):
        """Daily (``?date=``) or monthly (``?type=monthly&date=``) report scope."""
        report_type = request.args.get("type", "daily")
        selected = date_arg(request.args.get("date"), date.today())

        if report_type == "daily":
            return container.report_service.daily_report(selected, employee_id=employee_id), selected.isoformat()
        if report_type == "monthly":
            data = container.report_service.monthly_report(selected.year, selected.month, employee_id=employee_id)
            return data, selected.strftime("%Y-%m")
        if report_type == "range":
            start = date_arg(request.args.get("start"), selected)
            end = date_arg(request.args.get("end"), selected)
            data = container.report_service.range_report(start=start, end=end, employee_id=employee_id)
            return data, f"{start.isoformat()}_{end.isoformat()}"
        raise ValidationError("Report type must be daily, monthly or range")

    def csv_response(data: ReportData, scope: str):
        return app.response_class(
            write_report_csv(data.rows),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={report_filename(scope)}"},
        )

    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def dashboard(ctx):
        stats = container.report_service.dashboard_stats(date.today())
        return jsonify({"success": True, "stats": asdict(stats)})

    @app.route("/admin/reports", methods=["GET"], endpoint="admin_reports")
    @admin_required
    def admin_reports(ctx):
        data, _ = build_report(employee_id=optional_int(request.args.get("employee")))
        return jsonify(_report_json(data))

    @app.route("/admin/reports/export", methods=["GET"], endpoint="admin_reports_export")
    @admin_required
    def admin_reports_export(ctx):
        data, scope = build_report(employee_id=optional_int(request.args.get("employee")))
        if not data.rows:
            return jsonify({"success": False, "message": "No records to export"}), 404
        return csv_response(data, scope)

    @app.route("/me/report", methods=["GET"], endpoint="me_report")
    @login_required
    def me_report(ctx):
        data, _ = build_report(employee_id=ctx.employee_id)
        return jsonify(_report_json(data))
