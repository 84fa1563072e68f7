"""Shared Flask helpers: session guards, JSON body access and error translation."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from functools import wraps
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "UNAUTHORIZED", "message": "Login required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "UNAUTHORIZED", "message": "Login required"}), 401
        try:
            role = Role.parse(session.get("role"))
        except ValueError:
            role = None
        if role is not Role.ADMIN:
            raise AuthorizationError("Admin access required")
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return jsonify(exc.to_dict()), exc.http_status

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.name.upper().replace(" ", "_"), "message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "INTERNAL_ERROR", "message": "Internal server error"}), 500
