"""
TaskHub Backend — Shared Pydantic Schemas
===========================================

What:  Base model and the response shapes shared by every resource.

Wire format:
    JSON keys are camelCase (`dueDate`, `projectId`, `createdAt`). Request
    bodies also accept the snake_case field names. FastAPI serializes
    response models by alias, so Python code only ever uses snake_case.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every API schema: camelCase aliases, ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement, e.g. `{"message": "Task deleted successfully"}`."""

    message: str = Field(description="Human-readable result")


class ErrorResponse(CamelModel):
    """
    What:  Error body returned by every failing endpoint.

    Example:
        {"error": "Project not found", "requestId": "a1b2c3d4"}
    """

    error: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for load balancers and monitoring.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    active_sessions: int = Field(description="Number of live login sessions")
    uptime_seconds: float = Field(description="Seconds since service started")


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes are converted to UTC; naive ones are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
