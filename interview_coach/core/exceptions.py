"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- No stack traces leaked in production
"""
from typing import Optional


class CoachException(Exception):
    """
    Base exception for all interview coach errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(CoachException):
    """Raised when input validation fails."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class AuthenticationError(CoachException):
    """Raised when a token or credentials are missing, invalid or expired."""
    status_code = 401
    error_code = "authentication_error"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class PermissionDeniedError(CoachException):
    """Raised when the caller lacks the role or ownership for a resource."""
    status_code = 403
    error_code = "permission_denied"

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message)


class NotFoundError(CoachException):
    """Raised when a document does not exist."""
    status_code = 404
    error_code = "not_found"

    def __init__(self, message: str, resource_id: Optional[str] = None):
        super().__init__(message, details=f"id={resource_id}" if resource_id else None)
        self.resource_id = resource_id


class DatabaseError(CoachException):
    """Raised when a document-store operation fails."""
    status_code = 500
    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed", details: Optional[str] = None):
        super().__init__(message, details)


class DatabaseUnavailableError(CoachException):
    """Raised when the document store cannot be reached."""
    status_code = 503
    error_code = "database_unavailable"

    def __init__(self, message: str = "Database is not available"):
        super().__init__(message)


class LLMError(CoachException):
    """Raised when AI API calls fail."""
    status_code = 500
    error_code = "llm_error"

    def __init__(self, message: str = "AI service unavailable"):
        super().__init__(message)


class AIResponseError(CoachException):
    """Raised when an AI reply cannot be turned into the expected payload."""
    status_code = 500
    error_code = "ai_response_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, details)
