from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.auth import admin_required, current_user_id, json_body, login_required, start_session
from ..container import Container
from ..core.exceptions import AuthorizationError

_REGISTER_CHALLENGE = "webauthn_register_challenge"
_AUTH_CHALLENGE = "webauthn_auth_challenge"


def register(app: Flask, container: Container) -> None:
    def _own_user_id(value):
        if value and str(value) != current_user_id():
            raise AuthorizationError("본인 계정만 등록할 수 있습니다")
        return value

    @app.route("/api/biometric/register", methods=["POST"], endpoint="api_biometric_register_options")
    @login_required
    def api_biometric_register_options():
        data = json_body()
        options = container.biometric_service.registration_options(
            user_id=_own_user_id(data.get("userId")), email=data.get("email")
        )
        session[_REGISTER_CHALLENGE] = options["challenge"]
        return jsonify(options)

    @app.route("/api/biometric/register", methods=["PUT"], endpoint="api_biometric_register")
    @login_required
    def api_biometric_register():
        data = json_body()
        saved = container.biometric_service.complete_registration(
            user_id=_own_user_id(data.get("userId")),
            credential=data.get("credential"),
            expected_challenge=session.pop(_REGISTER_CHALLENGE, None),
        )
        return jsonify({"success": True, "message": "생체 인식이 등록되었습니다.", "credential": saved.to_dict()})

    @app.route("/api/biometric/authenticate", methods=["POST"], endpoint="api_biometric_auth_options")
    def api_biometric_auth_options():
        options = container.biometric_service.authentication_options()
        session[_AUTH_CHALLENGE] = options["challenge"]
        return jsonify(options)

    @app.route("/api/biometric/authenticate", methods=["PUT"], endpoint="api_biometric_authenticate")
    def api_biometric_authenticate():
        data = json_body()
        expected = session.pop(_AUTH_CHALLENGE, None)
        s_user = container.biometric_service.verify_assertion(
            assertion=data.get("assertion"), expected_challenge=expected
        )
        start_session(s_user)
        return jsonify({"success": True, "message": "인증되었습니다.", "user": {"id": s_user.user_id, "email": s_user.email}})

    @app.route("/api/biometric/credentials", methods=["GET"], endpoint="api_biometric_credentials")
    @login_required
    def api_biometric_credentials():
        items = container.biometric_service.list_credentials(user_id=current_user_id())
        return jsonify({"success": True, "registered": bool(items), "credentials": [c.to_dict() for c in items]})

    @app.route("/api/biometric/unregister", methods=["DELETE"], endpoint="api_biometric_unregister")
    @login_required
    def api_biometric_unregister():
        removed = container.biometric_service.unregister(user_id=current_user_id())
        return jsonify({"success": True, "message": "생체 인식 등록이 해제되었습니다.", "removed": removed})

    @app.route("/api/migrations/create-biometric-table", methods=["POST"], endpoint="api_biometric_migration")
    @admin_required
    def api_biometric_migration():
        return jsonify({"success": True, **container.biometric_service.table_status()})
