# services/errors.py
"""
Application error taxonomy.

Services raise these; middleware.error_handlers turns them into
{"success": false, "message": ...} responses with the matching status code.
"""
from __future__ import annotations


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def with_prefix(self, prefix: str) -> "AppError":
        """Same error class, message prefixed with caller context."""
        return type(self)(f"{prefix}: {self.message}")


class ValidationError(AppError):
    """Missing or malformed caller input (ids, business profile, query params)."""

    status_code = 400


class AuthError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class UpstreamServiceError(AppError):
    """News/sentiment API failure, timeout or malformed response."""

    status_code = 502


class StoreError(AppError):
    """Database read/write failure."""

    status_code = 500
