"""
Student Records API - Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions, one per failure class of the API.
How:   Services raise these; global handlers registered in main.py turn them
       into JSON error responses with the matching HTTP status code.

Exception Hierarchy:
    StudentAPIError (base)           → 500
    ├── ValidationError              → 400 Bad Request (missing fields, duplicate email)
    ├── AuthenticationError          → 401 Unauthorized (login mismatch)
    ├── PermissionDeniedError        → 403 Forbidden (update/delete credential mismatch)
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class StudentAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description returned in the response body
        context:  Additional debug info (logged, NOT returned to the client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StudentAPIError):
    """
    Raised when client input is missing or conflicts with stored data.

    When:    Required body fields absent or empty, email already registered,
             malformed JSON or path parameters.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(StudentAPIError):
    """
    Raised when login credentials do not match any stored record.

    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(StudentAPIError):
    """
    Raised when the current email/password sent with an update or delete do
    not match the record being changed.

    HTTP:    403 Forbidden
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Authentication failed. Please provide correct credentials.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StudentAPIError):
    """
    Raised when a requested resource does not exist.

    When:    No student row for an id, or the landing page file is missing.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(StudentAPIError):
    """
    Raised when a call to the external store fails.

    What:    Wraps SQLAlchemy/driver errors raised by StudentStore.
    HTTP:    500 Internal Server Error

    The driver message is kept as `message` and returned to the caller.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
