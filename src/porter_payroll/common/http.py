"""JSON envelope and error handling shared by every controller."""
from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(message: str, *, status: int, errors: Optional[list[dict]] = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        errors = None
        if isinstance(exc, ValidationError) and exc.errors:
            errors = [{"field": e.field, "message": e.message} for e in exc.errors]
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, exc.message)
        return fail(exc.message, status=exc.status_code, errors=errors)

    @app.errorhandler(404)
    def _route_not_found(_exc):
        return fail("Route not found", status=404)

    @app.errorhandler(405)
    def _method_not_allowed(_exc):
        return fail("Method not allowed", status=405)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return fail(exc.description or exc.name, status=exc.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = str(exc) if app.config.get("DEBUG") else "Internal server error"
        return fail(message, status=500)
