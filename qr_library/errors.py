from __future__ import annotations

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from qr_library.extensions import db


class LibraryError(ValueError):
    """Base class for errors that carry their own HTTP status."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(LibraryError):
    """Missing or malformed request fields."""

    status_code = 422


class InvalidInputError(LibraryError):
    """Input that passed validation but cannot be interpreted (e.g. a QR token)."""

    status_code = 400


class NotFoundError(LibraryError):
    status_code = 404


class PreconditionFailedError(LibraryError):
    """The student is not checked in to the library."""

    status_code = 400


class ConflictError(LibraryError):
    """Business rule violation: unavailable, duplicate, has active loans."""

    status_code = 400


class AuthError(LibraryError):
    status_code = 401


def _json_error(message, code=400, **extra):
    payload = {"success": False, "message": message}
    payload.update(extra)
    return jsonify(payload), code


def register_error_handlers(app):
    @app.errorhandler(LibraryError)
    def handle_library_error(e: LibraryError):
        db.session.rollback()
        return _json_error(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return _json_error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        db.session.rollback()
        current_app.logger.exception(f"[errors] Unhandled error: {e}")
        return _json_error("Unexpected error", 500)
