"""
Base exception classes for the whiteboard backend.

Each module should define its own exceptions that inherit from these bases.
Every base carries the HTTP status it maps to, so the API layer can turn
any domain error into a response without knowing the concrete class.
"""

from typing import Optional, Any


class WhiteboardError(Exception):
    """
    Base exception for all whiteboard errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class ValidationError(WhiteboardError):
    """Input validation failed (bad request)."""

    status_code = 400


class AuthenticationError(WhiteboardError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(WhiteboardError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(WhiteboardError):
    """Resource not found."""

    status_code = 404


class ConflictError(WhiteboardError):
    """A uniqueness rule would be violated."""

    status_code = 409


class InternalError(WhiteboardError):
    """Unexpected failure. The message is readable but never carries internals."""

    status_code = 500


class StoreError(InternalError):
    """
    The document store failed or could not be reached.

    The message only names the action. The store's own text stays in
    ``details["reason"]`` and the server log.
    """

    def __init__(self, action: str, reason: str = ""):
        super().__init__(
            f"The following error occurred while trying to {action}",
            code="STORE_ERROR",
            details={"action": action, "reason": reason},
        )
        self.reason = reason


class DuplicateRecordError(ConflictError):
    """
    Raised by repositories when the store reports a unique violation.

    Services catch this and raise a module-specific conflict with a
    message that makes sense to the caller.
    """

    def __init__(self, table: str, reason: str = ""):
        super().__init__(
            f"Duplicate record in {table}",
            code="DUPLICATE_RECORD",
            details={"table": table, "reason": reason},
        )
        self.table = table


class ExternalServiceError(InternalError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
