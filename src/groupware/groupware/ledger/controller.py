from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import admin_required, current_user_id, json_body, login_required
from ..common.datetime_utils import now_local
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _year_month() -> tuple[int, int]:
        today = now_local().date()
        return (
            request.args.get("year", type=int) or today.year,
            request.args.get("month", type=int) or today.month,
        )

    @app.route("/api/transactions", methods=["GET"], endpoint="api_transactions")
    @login_required
    def api_transactions():
        year, month = _year_month()
        items = container.ledger_service.list_month(user_id=current_user_id(), year=year, month=month)
        return jsonify({"success": True, "transactions": [t.to_dict() for t in items]})

    @app.route("/api/transactions", methods=["POST"], endpoint="api_transaction_create")
    @login_required
    def api_transaction_create():
        data = json_body()
        tx = container.ledger_service.add(
            user_id=current_user_id(),
            tx_date=data.get("date") or now_local().date(),
            type=data.get("type"),
            amount=data.get("amount"),
            category=data.get("category"),
            memo=data.get("memo"),
        )
        return jsonify({"success": True, "message": "저장되었습니다.", "transaction": tx.to_dict()}), 201

    @app.route("/api/transactions/<transaction_id>", methods=["PUT"], endpoint="api_transaction_update")
    @login_required
    def api_transaction_update(transaction_id: str):
        data = json_body()
        tx = container.ledger_service.update(
            user_id=current_user_id(),
            transaction_id=transaction_id,
            tx_date=data.get("date"),
            type=data.get("type"),
            amount=data.get("amount"),
            category=data.get("category"),
            memo=data.get("memo"),
        )
        return jsonify({"success": True, "message": "수정되었습니다.", "transaction": tx.to_dict()})

    @app.route("/api/transactions/<transaction_id>", methods=["DELETE"], endpoint="api_transaction_delete")
    @login_required
    def api_transaction_delete(transaction_id: str):
        container.ledger_service.delete(user_id=current_user_id(), transaction_id=transaction_id)
        return jsonify({"success": True, "message": "삭제되었습니다."})

    @app.route("/api/transactions/summary", methods=["GET"], endpoint="api_transaction_summary")
    @login_required
    def api_transaction_summary():
        year, month = _year_month()
        user_id = current_user_id()
        summary = container.ledger_service.month_summary(user_id=user_id, year=year, month=month)
        daily = container.ledger_service.daily_totals(user_id=user_id, year=year, month=month)
        return jsonify({"success": True, "summary": summary.to_dict(), "daily": [d.to_dict() for d in daily]})

    @app.route("/api/admin/transactions/check", methods=["GET"], endpoint="api_check_transactions")
    @admin_required
    def api_check_transactions():
        return jsonify({"success": True, **container.transaction_maintenance_service.inspect()})

    @app.route("/api/admin/transactions/duplicates", methods=["GET"], endpoint="api_duplicate_transactions")
    @admin_required
    def api_duplicate_transactions():
        groups = container.transaction_maintenance_service.find_duplicates()
        return jsonify({"success": True, "groups": [[t.to_dict() for t in g] for g in groups]})

    @app.route("/api/admin/transactions/fix", methods=["POST"], endpoint="api_fix_transactions")
    @admin_required
    def api_fix_transactions():
        data = json_body()
        rows = container.transaction_maintenance_service.repair_duplicate(
            delete_id=data.get("delete_id", ""),
            keep_id=data.get("keep_id", ""),
            new_date=data.get("new_date"),
        )
        return jsonify(
            {"success": True, "message": "수정 완료", "count": len(rows), "data": [t.to_dict() for t in rows]}
        )
