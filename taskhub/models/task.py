"""
TaskHub Backend — Task SQLAlchemy Model
=========================================

What:  ORM model for the `tasks` table.

A task has no owner column of its own. Its owner is the `user_id` of its
parent project, so every task query joins `projects`.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskhub.database import Base
from taskhub.models.mixins import TimestampMixin, UTCDateTime

if TYPE_CHECKING:
    from taskhub.models.project import Project

DEFAULT_TASK_PRIORITY = "medium"


class Task(TimestampMixin, Base):
    """
    A unit of work inside one Project.

    `completed` is a free boolean: any value may follow any other.
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    priority: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_TASK_PRIORITY,
        server_default=text(f"'{DEFAULT_TASK_PRIORITY}'"),
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    project: Mapped["Project"] = relationship(back_populates="tasks")

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, project_id={self.project_id}, title='{self.title}')>"
