from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, session

from ..common.auth import admin_required, current_user_id, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/companies", methods=["GET"], endpoint="api_admin_companies")
    @admin_required
    def api_admin_companies():
        companies = container.company_service.list_companies(user_id=current_user_id())
        return jsonify({"success": True, "companies": [c.to_dict() for c in companies]})

    @app.route("/api/admin/companies", methods=["POST"], endpoint="api_admin_create_company")
    @admin_required
    def api_admin_create_company():
        data = json_body()
        company = container.company_service.create_company(
            user_id=current_user_id(),
            name=data.get("name", ""),
            description=data.get("description"),
        )
        return jsonify({"success": True, "message": "회사가 생성되었습니다.", "company": company.to_dict()}), 201

    @app.route("/api/team", methods=["GET"], endpoint="api_team")
    @login_required
    def api_team():
        team = container.company_service.get_my_team(user_id=current_user_id())
        return jsonify(
            {
                "success": True,
                "company": team.company.to_dict() if team.company else None,
                "members": [asdict(m) for m in team.members],
            }
        )

    @app.route("/api/team/join", methods=["POST"], endpoint="api_team_join")
    @login_required
    def api_team_join():
        data = json_body()
        company = container.company_service.join_company(user_id=current_user_id(), code=data.get("code", ""))
        session["company_id"] = company.id
        return jsonify({"success": True, "message": f"{company.name}에 가입되었습니다.", "company": company.to_dict()})

    @app.route("/api/departments", methods=["GET"], endpoint="api_departments")
    @login_required
    def api_departments():
        departments = container.company_service.list_departments()
        return jsonify({"success": True, "departments": [asdict(d) for d in departments]})
