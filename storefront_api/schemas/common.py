"""
Storefront API - Shared Response Schemas
==========================================

What:  Response models shared across routes: confirmations, health,
       echo replies and the standard error body.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation body for update/replace/delete."""
    message: str = Field(description="Human-readable confirmation")


class HealthResponse(BaseModel):
    """
    Liveness + database check.

    status is "ok" when the database answered SELECT 1, "error" otherwise.
    """
    status: str = Field(description="ok or error")
    db: bool = Field(description="Whether the database answered SELECT 1")


class EchoResponse(BaseModel):
    """Returned by GET /say."""
    message: str = Field(description="Body returned by the echo function")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Customer not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Field errors for validation failures")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
