"""
Noteful Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the validation layer, services and routes; caught by handlers.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    │   ├── InvalidReferenceError    → 400 (malformed id in path, body or query)
    │   ├── MissingFieldError        → 400 (required field absent or blank)
    │   ├── FieldTooLongError        → 400 (title or name over 255 characters)
    │   └── ConflictError            → 400 (unique name already taken)
    └── NotFoundError                → 404 Not Found

    Everything else (store unreachable, driver errors) is deliberately NOT
    wrapped: it propagates to the catch-all handler and becomes a generic 500.
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info returned as `details` for client errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    HTTP:    400 Bad Request
    Raised before any store access, so a rejected request has no side effects.
    """

    error_code = "validation_error"

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


class InvalidReferenceError(ValidationError):
    """
    Raised when a value that should identify an entity is not well-formed.

    The path parameter reads "The id is not valid"; body and query fields
    name themselves ("The folderId is not valid").
    """

    error_code = "invalid_reference"

    def __init__(
        self,
        field: str = "id",
        value: Any = None,
        message: Optional[str] = None,
    ):
        context = {"value": value} if value is not None else None
        super().__init__(
            message=message or f"The {field} is not valid",
            field=field,
            context=context,
        )


class MissingFieldError(ValidationError):
    """Raised when a required field is absent or empty on create/replace."""

    error_code = "missing_field"

    def __init__(self, field: str):
        super().__init__(message=f"Missing `{field}` in request body", field=field)


class FieldTooLongError(ValidationError):
    """Raised when a title or name does not fit its column."""

    error_code = "field_too_long"

    def __init__(self, field: str, max_length: int):
        super().__init__(
            message=f"`{field}` must be at most {max_length} characters",
            field=field,
            context={"max_length": max_length},
        )


class ConflictError(ValidationError):
    """
    Raised when a unique name (folder or tag) is already taken.

    The store reports the violation as an IntegrityError; services translate it
    into this exception so clients never see a raw driver error.
    """

    error_code = "conflict"

    def __init__(self, resource: str, name: Optional[str] = None):
        context = {"resource": resource}
        if name is not None:
            context["name"] = name
        super().__init__(
            message=f"The {resource} name already exists",
            field="name",
            context=context,
        )


class NotFoundError(NotefulError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found
    Services return None for a missing entity; routes hand that None to
    found_or_404() which raises this, so every route shares one 404 body.
    """

    def __init__(
        self,
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
    ):
        ctx: Dict[str, Any] = {}
        if resource:
            ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Not Found", context=ctx)
