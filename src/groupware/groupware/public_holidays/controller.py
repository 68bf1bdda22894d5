from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import login_required
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays/<int:year>", methods=["GET"], endpoint="api_holidays")
    @login_required
    def api_holidays(year: int):
        items = container.holiday_calendar.get_holidays(year)
        return jsonify({"success": True, "year": year, "holidays": [h.to_dict() for h in items]})

    @app.route("/api/holidays/check", methods=["GET"], endpoint="api_holiday_check")
    @login_required
    def api_holiday_check():
        value = request.args.get("date", "")
        try:
            d = parse_iso_date(value)
        except ValueError:
            raise ValidationError("날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)")
        info = container.holiday_calendar.holiday_info(d)
        return jsonify(
            {
                "success": True,
                "date": d.isoformat(),
                "is_holiday": info is not None,
                "name": info.name if info else None,
            }
        )
