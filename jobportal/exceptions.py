# jobportal/exceptions.py
"""
Domain errors raised by the crud layer and guards.

Each error knows its HTTP status; the handlers in ``jobportal.middleware``
turn them into the ``{success, message, ...}`` envelope.
"""
from typing import Any, Optional


class AppError(Exception):
    status_code = 500
    headers: Optional[dict] = None

    def __init__(self, message: str, errors: Optional[list] = None, **extra: Any):
        super().__init__(message)
        self.message = message
        self.errors = errors
        self.extra = {k: v for k, v in extra.items() if v is not None}


class InvalidInput(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    status_code = 409


class PreconditionFailed(AppError):
    """Profile or company onboarding incomplete; carries ``step``/``action`` hints"""
    status_code = 400


class InvalidOperation(AppError):
    """State transition or mutation not allowed for the current state"""
    status_code = 400
