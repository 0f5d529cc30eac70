"""
Storefront API - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the validation layer and services; caught by global handlers.

Exception Hierarchy:
    StorefrontError (base)        → 500 Internal Server Error
    ├── ValidationError           → 400 Bad Request (field-level errors)
    ├── NotFoundError             → 404 Not Found
    ├── PersistenceError          → 500 Internal Server Error
    │   └── ConflictError         → 500 (duplicate business key)
    └── EchoFunctionError         → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront API errors.

    Attributes:
        message:  Human-readable error description (returned in the response)
        context:  Additional info; for validation errors this is returned
                  as `details`, otherwise it is only logged
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when client input fails validation.

    HTTP:    400 Bad Request

    Carries every field-level problem found in the request, so the client
    can fix them all at once:

        {
            "error": "validation_error",
            "message": "cust_code required",
            "details": {"errors": [{"field": "cust_code", "message": "cust_code required"}]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if errors is None:
            errors = [{"field": field, "message": message}] if field else []
        ctx["errors"] = errors
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors


class NotFoundError(StorefrontError):
    """
    Raised when no row matches the requested business key.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PersistenceError(StorefrontError):
    """
    Raised when a store operation fails for an unclassified reason.

    HTTP:    500 Internal Server Error

    The underlying driver message is exposed in the response body. No retry
    is attempted; the failure is terminal for the request.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(PersistenceError):
    """
    Raised when an insert collides with an existing business key.

    Surfaced as a generic persistence failure (500): the create path does
    not pre-check for an existing row.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"{resource} '{resource_id}' already exists",
            context=ctx,
        )


class EchoFunctionError(StorefrontError):
    """
    Raised when the echo function cannot be reached or answers with an error.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Echo function call failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def driver_message(exc: Exception) -> str:
    """
    Text of the underlying DBAPI error when SQLAlchemy wrapped one
    (e.g. "(1062, \"Duplicate entry 'c1' for key 'PRIMARY'\")"), else str(exc).
    """
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)
