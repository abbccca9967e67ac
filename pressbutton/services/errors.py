"""
Service-level failures.

Each error keeps the operation name and the ids involved so the HTTP layer
can log them and map the kind to a status code. Store failures
(SQLAlchemy errors, deadline ``TimeoutError``) are not wrapped.
"""

from typing import Any, Optional


class ServiceError(Exception):
    def __init__(self, message: str, *, operation: Optional[str] = None, **context: Any):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context = context


class InvalidRequestError(ServiceError):
    """Input that passed schema validation but is still unusable."""


class NotFoundError(ServiceError):
    """A referenced question/user is missing, or the caller does not own it."""


class ConflictError(ServiceError):
    pass


class AuthenticationError(ServiceError):
    pass
