"""
Shared error handling for the pool cache service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class PoolCacheException(Exception):
    """Base exception for the pool cache service."""

    status_code = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(PoolCacheException):
    """Validation-related errors."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class ExternalServiceError(PoolCacheException):
    """External service errors."""

    status_code = 502

    def __init__(
        self,
        service: str,
        message: str = "External service error",
        details: Optional[Dict[str, Any]] = None,
        code: str = "EXTERNAL_SERVICE_ERROR",
    ):
        super().__init__(code, f"{service}: {message}", details)


class RemoteFetchError(ExternalServiceError):
    """The object store call failed or returned no retrievable body."""

    def __init__(self, message: str = "Remote fetch failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("object_store", message, details, code="REMOTE_FETCH_ERROR")


class DeserializationError(PoolCacheException):
    """A stored pool payload is not a JSON array of pool records."""

    status_code = 502

    def __init__(self, message: str = "Malformed pool payload", details: Optional[Dict[str, Any]] = None):
        super().__init__("DESERIALIZATION_ERROR", message, details)
