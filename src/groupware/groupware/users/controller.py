from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, session

from ..common.auth import current_user_id, json_body, login_required, start_session
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/signup", methods=["POST"], endpoint="api_signup")
    def api_signup():
        data = json_body()
        s_user = container.auth_service.sign_up(
            email=data.get("email", ""),
            password=data.get("password", ""),
            full_name=data.get("full_name", ""),
            accept_code=data.get("accept_code", ""),
        )
        start_session(s_user)
        return jsonify({"success": True, "message": "회원가입이 완료되었습니다.", "user": asdict(s_user)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        start_session(s_user, remember=bool(data.get("remember_me")))
        return jsonify({"success": True, "message": "로그인되었습니다.", "user": asdict(s_user)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"success": True, "message": "로그아웃되었습니다."})

    @app.route("/api/auth/me", methods=["GET"], endpoint="api_me")
    @login_required
    def api_me():
        s_user = container.auth_service.session_user_for(current_user_id())
        # membership may have changed since login
        session["company_id"] = s_user.company_id
        session["is_admin"] = s_user.is_admin
        return jsonify({"success": True, "user": asdict(s_user)})

    @app.route("/api/auth/password", methods=["POST"], endpoint="api_change_password")
    @login_required
    def api_change_password():
        data = json_body()
        container.auth_service.change_password(
            current_user_id(),
            new_password=data.get("new_password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return jsonify({"success": True, "message": "비밀번호가 변경되었습니다."})

    @app.route("/api/profile", methods=["GET"], endpoint="api_profile")
    @login_required
    def api_profile():
        profile = container.profile_service.get(current_user_id())
        return jsonify({"success": True, "profile": profile.to_public_dict()})

    @app.route("/api/profile", methods=["PATCH"], endpoint="api_profile_update")
    @login_required
    def api_profile_update():
        data = json_body()
        profile = container.profile_service.update_full_name(current_user_id(), data.get("full_name"))
        session["name"] = profile.display_name
        return jsonify({"success": True, "message": "프로필이 저장되었습니다.", "profile": profile.to_public_dict()})

    @app.route("/api/profile/work-settings", methods=["GET"], endpoint="api_work_settings")
    @login_required
    def api_work_settings():
        settings = container.profile_service.get_work_settings(current_user_id())
        return jsonify({"success": True, "settings": asdict(settings)})

    @app.route("/api/profile/work-settings", methods=["PUT"], endpoint="api_work_settings_update")
    @login_required
    def api_work_settings_update():
        data = json_body()
        settings = container.profile_service.update_work_settings(
            current_user_id(),
            weekly_work_hours=data.get("weekly_work_hours"),
            weekly_work_start=data.get("weekly_work_start", ""),
            weekly_work_end=data.get("weekly_work_end", ""),
        )
        return jsonify({"success": True, "message": "설정이 저장되었습니다.", "settings": asdict(settings)})
