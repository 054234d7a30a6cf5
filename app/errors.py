# app/errors.py
"""
Domain errors raised by services and routers.
Each carries the HTTP status it surfaces as; main.py turns them into responses.
"""

from typing import Optional


class BarCountError(Exception):
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class AuthError(BarCountError):
    """Missing session or bad credentials."""
    status_code = 401


class ForbiddenError(BarCountError):
    """Authenticated, but not allowed to touch this bar."""
    status_code = 403


class NotFoundError(BarCountError):
    status_code = 404


class ConflictError(BarCountError):
    """Duplicate username at registration."""
    status_code = 409


class ValidationError(BarCountError):
    """Malformed request payload. `errors` holds one dict per failing field."""
    status_code = 400

    def __init__(self, message: str = "Invalid request", errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        errors = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
            for e in exc.errors()
        ]
        return cls(errors=errors)
