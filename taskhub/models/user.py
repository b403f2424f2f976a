"""
TaskHub Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Who:   Created by AuthService.register(); read by AuthService.login().

Table Design:
    - email is UNIQUE: the login key, and the duplicate-registration check
      is backed by the constraint when two registrations race
    - password_digest holds a bcrypt digest; it never leaves the service
      layer (response schemas have no field for it)
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskhub.database import Base
from taskhub.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from taskhub.models.project import Project


class User(TimestampMixin, Base):
    """
    A registered account. Owns zero or more Projects.

    Lifecycle:
        Created by registration; not mutated or deleted through the API.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password_digest: Mapped[str] = mapped_column(String(255), nullable=False)

    # passive_deletes: let ON DELETE CASCADE remove rows without loading them
    projects: Mapped[List["Project"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
