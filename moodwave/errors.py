"""Error taxonomy shared by the domain services and the HTTP layer."""

from __future__ import annotations

import logging
from typing import Optional

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class MoodwaveError(Exception):
    status_code = 500
    code = "server_error"
    default_message = "Unexpected server error."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class BadRequest(MoodwaveError):
    status_code = 400
    code = "bad_request"
    default_message = "Required field is missing or invalid."


class Unauthorized(MoodwaveError):
    status_code = 401
    code = "authentication_required"
    default_message = "Authentication required."


class Forbidden(MoodwaveError):
    status_code = 403
    code = "forbidden"
    default_message = "Unauthorized: Not your playlist."


class NotFound(MoodwaveError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found."


class Conflict(MoodwaveError):
    status_code = 409
    code = "conflict"
    default_message = "Resource already exists."


class UpstreamFailure(MoodwaveError):
    status_code = 502
    code = "upstream_failure"
    default_message = "Catalog service request failed."


class ServerError(MoodwaveError):
    pass


def register_error_handlers(app) -> None:
    """Render every failure reaching the request boundary as a JSON body."""
    from moodwave.database.db_manager import db

    @app.errorhandler(MoodwaveError)
    def _handle_domain_error(exc: MoodwaveError):
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        code = (exc.name or "error").strip().lower().replace(" ", "_")
        return jsonify({"error": code, "message": exc.description}), exc.code or 500

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.error("Unhandled error: %s", exc, exc_info=True)
        try:
            db.session.rollback()
        except Exception:  # pragma: no cover - session already unusable
            logger.debug("Session rollback failed after unhandled error", exc_info=True)
        return jsonify(ServerError().to_dict()), 500


__all__ = [
    "MoodwaveError",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "Conflict",
    "UpstreamFailure",
    "ServerError",
    "register_error_handlers",
]
