"""
Noteful Backend — Shared Pydantic Schemas
===========================================

What:  Base model and the response shapes shared by every route.
Why:   The API speaks camelCase JSON (folderId, createdAt) while Python code
       uses snake_case; one base class owns that mapping.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for request and response bodies.

    alias_generator:   fields serialize as camelCase
    populate_by_name:  requests may use either camelCase or snake_case keys
    from_attributes:   responses validate straight from ORM objects
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "invalid_reference",
            "message": "The id is not valid",
            "details": {"field": "id", "value": "NOT-A-VALID-ID"},
            "request_id": "1f0c2b7a"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(ApiModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
