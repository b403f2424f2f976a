"""
TaskHub Backend — Project Schemas
===================================

What:  Request body for create/replace and the project response.

Update semantics:
    PUT replaces every writable field. Optional fields omitted from the
    body fall back to the same defaults as on create (description and
    dueDate become null, status becomes "active").

Owner:
    There is no `userId` input field. A client-supplied `userId` is
    ignored; the owner always comes from the session.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from taskhub.models.project import DEFAULT_PROJECT_STATUS
from taskhub.schemas.common import CamelModel, to_utc


class ProjectWrite(CamelModel):
    """Body of POST /api/projects and PUT /api/projects/{id}."""

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    status: str = Field(default=DEFAULT_PROJECT_STATUS, min_length=1, max_length=50)
    due_date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class ProjectResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    status: str
    due_date: Optional[datetime] = None
    user_id: int
    created_at: datetime
    updated_at: datetime
