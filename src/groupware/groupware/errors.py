from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Every failure leaves the API as {"success": false, "error": "..."}."""

    @app.errorhandler(DomainError)
    def domain_error(error: DomainError):
        return jsonify({"success": False, "error": str(error)}), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"success": False, "error": "요청한 경로를 찾을 수 없습니다"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"success": False, "error": "허용되지 않은 요청 방식입니다"}), 405

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"success": False, "error": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        logger.exception("unhandled error: %s", error)
        message = "서버 오류가 발생했습니다"
        if app.config.get("DEBUG"):
            message = f"{message}: {error}"
        return jsonify({"success": False, "error": message}), 500
