from __future__ import annotations

from functools import wraps

from flask import jsonify, request, session


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "error": "로그인이 필요합니다"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "error": "로그인이 필요합니다"}), 401
        if not session.get("is_admin"):
            return jsonify({"success": False, "error": "관리자만 접근할 수 있습니다."}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> str:
    return str(session["user_id"])


def start_session(s_user, *, remember: bool = False) -> None:
    """Store a SessionUser into the Flask session."""
    session.clear()
    session.permanent = bool(remember)
    session["user_id"] = s_user.user_id
    session["email"] = s_user.email
    session["name"] = s_user.full_name or s_user.email
    session["is_admin"] = bool(s_user.is_admin)
    session["company_id"] = s_user.company_id


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
