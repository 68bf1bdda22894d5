from __future__ import annotations

from flask import Flask, jsonify

from ..common.auth import current_user_id, json_body, login_required
from ..common.datetime_utils import now_local
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_record")
    @login_required
    def api_attendance_record():
        data = json_body()
        result = container.attendance_service.record_clock_event(
            user_id=current_user_id(),
            clock_type=data.get("type"),
            timestamp=data.get("timestamp"),
        )
        return jsonify({"success": True, "message": result.message, "event": result.event.to_dict()})

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    @login_required
    def api_clock_in():
        result = container.attendance_service.clock_in(user_id=current_user_id(), now=now_local())
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "record": result.record.to_dict() if result.record else None,
                "event": result.event.to_dict(),
            }
        )

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    @login_required
    def api_clock_out():
        result = container.attendance_service.clock_out(user_id=current_user_id(), now=now_local())
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "record": result.record.to_dict() if result.record else None,
                "event": result.event.to_dict(),
            }
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    @login_required
    def api_attendance_today():
        record = container.attendance_service.get_today(user_id=current_user_id(), today=now_local().date())
        return jsonify({"success": True, "record": record.to_dict() if record else None})
