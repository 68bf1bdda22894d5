from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.auth import current_user_id, login_required
from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _parse_range() -> tuple[date, date]:
        today = now_local().date()
        try:
            start = parse_iso_date(request.args["start"]) if request.args.get("start") else today.replace(day=1)
            end = parse_iso_date(request.args["end"]) if request.args.get("end") else today
        except ValueError:
            raise ValidationError("날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)")
        return start, end

    @app.route("/api/work-summary", methods=["GET"], endpoint="api_work_summary")
    @login_required
    def api_work_summary():
        summary = container.work_summary_service.weekly_summary(user_id=current_user_id(), today=now_local().date())
        return jsonify({"success": True, "summary": container.work_summary_service.to_dict(summary)})

    @app.route("/api/work-report", methods=["GET"], endpoint="api_work_report")
    @login_required
    def api_work_report():
        start, end = _parse_range()
        data = container.work_report_service.build_report(user_id=current_user_id(), start=start, end=end)
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary})

    @app.route("/api/work-report.csv", methods=["GET"], endpoint="api_work_report_csv")
    @login_required
    def api_work_report_csv():
        start, end = _parse_range()
        data = container.work_report_service.build_report(user_id=current_user_id(), start=start, end=end)
        filename = f"work_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            container.work_report_service.to_csv_bytes(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
