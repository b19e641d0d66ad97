"""
Custom Exception Classes for LingoPress

This module defines custom exceptions for consistent error responses
across the application. Every exception carries an HTTP status code and a
machine-readable ``ErrorCode``.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error responses."""

    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    PUBLICATION_FAILED = "PUBLICATION_FAILED"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LingoPressError(Exception):
    """Base exception class for all LingoPress exceptions"""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Authorization Exceptions
# ============================================================================


class AuthorizationError(LingoPressError):
    """Raised when the request role lacks a capability"""

    error_code = ErrorCode.AUTH_PERMISSION_DENIED

    def __init__(self, message: str = "Forbidden", required_permission: str | None = None):
        details = {"required_permission": required_permission} if required_permission else {}
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN, details=details)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(LingoPressError):
    """Base class for resource not found errors"""

    error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class TagNotFoundError(ResourceNotFoundError):
    def __init__(self, tag_id: Any | None = None):
        super().__init__(resource_type="Tag", resource_id=tag_id)


class ArticleNotFoundError(ResourceNotFoundError):
    def __init__(self, article_id: Any | None = None):
        super().__init__(resource_type="Article", resource_id=article_id)


class LanguageNotFoundError(ResourceNotFoundError):
    def __init__(self, language_id: Any | None = None):
        super().__init__(resource_type="Language", resource_id=language_id)


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(LingoPressError):
    """Raised when input validation fails"""

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class DuplicateResourceError(LingoPressError):
    """Raised when attempting to create a duplicate resource"""

    error_code = ErrorCode.VALIDATION_DUPLICATE_RESOURCE

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "field": field, "value": value},
        )


# ============================================================================
# Database & Service Exceptions
# ============================================================================


class DatabaseError(LingoPressError):
    """Raised when a database operation fails"""

    error_code = ErrorCode.DATABASE_ERROR

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


class ServiceUnavailableError(LingoPressError):
    """Raised when the content catalog cannot be reached"""

    error_code = ErrorCode.SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Database not available"):
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


class PublicationError(LingoPressError):
    """Raised at the route boundary when the publish step did not complete"""

    error_code = ErrorCode.PUBLICATION_FAILED

    def __init__(self, message: str = "Failed to publish article", article_id: str | None = None):
        details = {"article_id": article_id} if article_id else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
