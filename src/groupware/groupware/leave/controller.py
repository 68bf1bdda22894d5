from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user_id, login_required
from ..common.datetime_utils import now_local
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave/balance", methods=["GET"], endpoint="api_leave_balance")
    @login_required
    def api_leave_balance():
        year = request.args.get("year", type=int) or now_local().year
        balance = container.leave_service.balance(user_id=current_user_id(), year=year)
        return jsonify({"success": True, "balance": balance.to_dict()})
