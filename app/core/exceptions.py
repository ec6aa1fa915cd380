"""
Domain exceptions for the application.

Each exception carries the HTTP status it maps to, a human readable message
and a list of contextual issue strings. They are raised by services and
dependencies and translated into the error envelope in
``app.core.error_handlers``; handlers never catch them.
"""
from typing import List, Optional

from fastapi import status


class AppException(Exception):
    """Base application exception"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, issues: Optional[List[str]] = None):
        self.message = message
        self.issues = issues or []
        super().__init__(self.message)


class BadRequestError(AppException):
    """Raised when input is malformed or violates a storage constraint"""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppException):
    """Raised when the caller cannot be authenticated"""
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppException):
    """Raised when the caller is authenticated but not allowed"""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppException):
    """Raised when a resource (or one of its ancestors) is not found"""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppException):
    """Raised when a uniqueness constraint is violated"""
    status_code = status.HTTP_409_CONFLICT


class RateLimitError(AppException):
    """Raised when a client exceeds its request budget"""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class InternalServerError(AppException):
    """Raised for failures that have no better classification"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
