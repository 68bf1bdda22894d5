from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user_id, json_body, login_required
from ..common.datetime_utils import now_local, parse_hh_mm, parse_iso_date
from ..container import Container
from ..core.enums import EventType, Visibility
from ..core.exceptions import ValidationError
from .model import EventDraft


def _flag(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def draft_from_payload(data: dict) -> EventDraft:
    """Build an EventDraft from the calendar form JSON."""
    try:
        start_date = parse_iso_date(data["start_date"]) if data.get("start_date") else None
        end_date = parse_iso_date(data["end_date"]) if data.get("end_date") else None
    except ValueError:
        raise ValidationError("날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)")
    try:
        start_time = parse_hh_mm(data["start_time"]) if data.get("start_time") else None
        end_time = parse_hh_mm(data["end_time"]) if data.get("end_time") else None
    except ValueError:
        raise ValidationError("시간 형식이 올바르지 않습니다 (HH:MM)")
    try:
        event_type = EventType(data.get("event_type") or EventType.OTHER.value)
        visibility = Visibility(data.get("visibility") or Visibility.PERSONAL.value)
    except ValueError:
        raise ValidationError("일정 유형이 올바르지 않습니다")

    exclude = data.get("exclude_lunch_time")
    return EventDraft(
        title=data.get("title") or "",
        description=data.get("description") or "",
        start_date=start_date,
        end_date=end_date,
        start_time=start_time,
        end_time=end_time,
        location=data.get("location") or "",
        is_all_day=_flag(data.get("is_all_day")),
        event_type=event_type,
        visibility=visibility,
        leave_type=data.get("leave_type"),
        exclude_lunch_time=None if exclude is None else _flag(exclude),
        department_id=data.get("department_id"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events", methods=["GET"], endpoint="api_events")
    @login_required
    def api_events():
        user_id = current_user_id()
        scope = request.args.get("scope", "personal")
        if scope == "company":
            events = container.event_service.list_company_events(user_id=user_id)
        else:
            events = container.event_service.list_my_events(user_id=user_id)
        return jsonify({"success": True, "events": [e.to_dict() for e in events]})

    @app.route("/api/events", methods=["POST"], endpoint="api_event_create")
    @login_required
    def api_event_create():
        event = container.event_service.save_event(user_id=current_user_id(), draft=draft_from_payload(json_body()))
        return jsonify({"success": True, "message": "일정이 등록되었습니다.", "event": event.to_dict()}), 201

    @app.route("/api/events/<event_id>", methods=["PUT"], endpoint="api_event_update")
    @login_required
    def api_event_update(event_id: str):
        event = container.event_service.save_event(
            user_id=current_user_id(), draft=draft_from_payload(json_body()), event_id=event_id
        )
        return jsonify({"success": True, "message": "일정이 수정되었습니다.", "event": event.to_dict()})

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="api_event_delete")
    @login_required
    def api_event_delete(event_id: str):
        container.event_service.delete_event(user_id=current_user_id(), event_id=event_id)
        return jsonify({"success": True, "message": "일정이 삭제되었습니다."})

    @app.route("/api/events/<event_id>/attendance-time", methods=["PATCH"], endpoint="api_event_attendance_time")
    @login_required
    def api_event_attendance_time(event_id: str):
        data = json_body()
        exclude = data.get("exclude_lunch_time")
        event = container.event_service.update_attendance_time(
            user_id=current_user_id(),
            event_id=event_id,
            hh_mm=data.get("time", ""),
            exclude_lunch_time=None if exclude is None else _flag(exclude),
        )
        return jsonify({"success": True, "message": "시간이 수정되었습니다.", "event": event.to_dict()})

    @app.route("/api/calendar/<int:year>/<int:month>", methods=["GET"], endpoint="api_calendar_month")
    @login_required
    def api_calendar_month(year: int, month: int):
        days = container.event_service.month_view(
            user_id=current_user_id(),
            year=year,
            month=month,
            today=now_local().date(),
            show_personal=_flag(request.args.get("personal"), default=True),
            show_company=_flag(request.args.get("company"), default=True),
        )
        return jsonify({"success": True, "year": year, "month": month, "days": [d.to_dict() for d in days]})

    @app.route("/api/leave-types", methods=["GET"], endpoint="api_leave_types")
    @login_required
    def api_leave_types():
        types = container.event_service.list_leave_types()
        return jsonify({"success": True, "leave_types": [t.to_dict() for t in types]})
