from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    error_kind = "INTERNAL_SERVER_ERROR"
    default_message = "Service error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code or self.error_kind, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    error_kind = "INVALID_PARAM"
    default_message = "Invalid input"


class NotFoundError(ServiceError):
    """Raised when a requested object does not exist."""

    http_status = 404
    error_kind = "UNKNOWN_OBJECT"
    default_message = "Not found"


class ConflictError(ServiceError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    error_kind = "CONFLICT_OBJECT"
    default_message = "Conflict"


class UnauthorizedError(ServiceError):
    """Raised when authentication fails."""

    http_status = 401
    error_kind = "INVALID_CREDENTIALS"
    default_message = "Unauthorized"


class ForbiddenError(ServiceError):
    """Raised when the authenticated user lacks the required group."""

    http_status = 403
    error_kind = "NOT_ALLOWED"
    default_message = "Forbidden"


class ConfigurationError(ServiceError):
    """Raised when a required setting or dependency is missing (database, SMTP)."""

    http_status = 503
    error_kind = "INVALID_CONFIG"
    default_message = "Invalid configuration"
