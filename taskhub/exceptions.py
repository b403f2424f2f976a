"""
TaskHub Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a user-safe message and an optional context
       dict. Global handlers registered in main.py turn them into
       `{"error": message}` JSON bodies with the right status code.
Who:   Raised by services, dependencies and routes; caught by global handlers.

Exception Hierarchy:
    TaskHubError (base)
    ├── ValidationError       → 400 Bad Request
    ├── ConflictError         → 400 Bad Request (duplicate unique value)
    ├── AuthenticationError   → 401 Unauthorized
    ├── NotFoundError         → 404 Not Found (missing OR not owned)
    ├── DatabaseError         → 500 Internal Server Error
    └── SessionStoreError     → 500 Internal Server Error

Ownership failures are deliberately raised as NotFoundError, so a caller
cannot distinguish "belongs to someone else" from "does not exist".
"""

from typing import Any, Dict, Optional


class TaskHubError(Exception):
    """
    Base exception for all TaskHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TaskHubError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, blank values, a projectId the caller
             does not own.
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


class ConflictError(TaskHubError):
    """
    Raised when a unique value is already taken (e.g. a registered email).

    HTTP:    400 Bad Request — the API reports conflicts as client errors.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(TaskHubError):
    """
    Raised when the caller has no active session or presents bad credentials.

    HTTP:    401 Unauthorized
    Login failures always use the same message whether the email is unknown
    or the password is wrong.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized. Please log in.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TaskHubError):
    """
    Raised when no resource matches the caller-scoped lookup.

    HTTP:    404 Not Found
    The message names the resource type only ("Project not found"); the id
    goes into the context for logging.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(TaskHubError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error
    The message is generic ("Failed to fetch projects"); the SQL error is
    logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SessionStoreError(TaskHubError):
    """
    Raised when the session store cannot create or destroy a session.

    HTTP:    500 Internal Server Error
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Session storage is unavailable.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
