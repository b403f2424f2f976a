"""
TaskHub Backend — Project SQLAlchemy Model
============================================

What:  ORM model for the `projects` table.
Who:   ProjectService (CRUD) and TaskService (ownership joins).

Ownership:
    `user_id` is set from the session identity at creation and is never
    written again. Every project query is filtered on it (see
    taskhub.services.scoping), which is what makes a project invisible to
    other users.

Index on user_id:
    Backs the "list my projects" query and every scoped lookup.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskhub.database import Base
from taskhub.models.mixins import TimestampMixin, UTCDateTime

if TYPE_CHECKING:
    from taskhub.models.task import Task
    from taskhub.models.user import User

DEFAULT_PROJECT_STATUS = "active"


class Project(TimestampMixin, Base):
    """
    A project owned by exactly one User. Owns zero or more Tasks.
    """

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_PROJECT_STATUS,
        server_default=text(f"'{DEFAULT_PROJECT_STATUS}'"),
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped["User"] = relationship(back_populates="projects")

    tasks: Mapped[List["Task"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, user_id={self.user_id}, name='{self.name}')>"
