"""
Typed errors raised by the query builders and repositories.

Route handlers never build error responses themselves; the exception
handlers registered in main.py turn every JoblyError into
{"error": {"message": ..., "status": ...}} with the matching status code.
"""
from typing import Any


class JoblyError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Any = None, status: int | None = None):
        self.message = message if message is not None else self.default_message
        if status is not None:
            self.status = status
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status}}


class BadRequestError(JoblyError):
    status = 400
    default_message = "Bad Request"


class EmptyInputError(BadRequestError):
    """Raised when a partial update carries no fields."""

    default_message = "No data"


class UnauthorizedError(JoblyError):
    status = 401
    default_message = "Unauthorized"


class ForbiddenError(JoblyError):
    status = 403
    default_message = "Forbidden"


class NotFoundError(JoblyError):
    status = 404
    default_message = "Not Found"


class ConflictError(JoblyError):
    status = 409
    default_message = "Conflict"
