"""
TaskHub Backend — Task Schemas
================================

What:  Request bodies for task create/replace and the task response.

`projectId` is required on create. On update it is optional: when absent
the task stays in its current project. Every other writable field is
replaced, with omitted ones reset to their defaults (completed=false,
priority="medium", description/dueDate=null).
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from taskhub.models.task import DEFAULT_TASK_PRIORITY
from taskhub.schemas.common import CamelModel, to_utc


class _TaskFields(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    completed: bool = False
    priority: str = Field(default=DEFAULT_TASK_PRIORITY, min_length=1, max_length=50)
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class TaskCreate(_TaskFields):
    """Body of POST /api/tasks."""

    project_id: int


class TaskUpdate(_TaskFields):
    """Body of PUT /api/tasks/{id}."""

    project_id: Optional[int] = None


class TaskResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    priority: str
    due_date: Optional[datetime] = None
    project_id: int
    created_at: datetime
    updated_at: datetime
