"""
TaskHub Backend — Ownership Scoping
=====================================

What:  Query builders that restrict projects and tasks to one owner.
Who:   ProjectService and TaskService; nothing queries these tables without
       going through here.

Rules:
    Project visible to user U  ⇔  project.user_id = U
    Task visible to user U     ⇔  task's project.user_id = U   (join)

The owner is part of the WHERE clause of the lookup itself. A row owned by
someone else is therefore indistinguishable from a missing row, and both
surface as NotFoundError.

Ids:
    Path ids arrive as raw strings. Anything that is not a decimal integer
    in the INTEGER primary-key range (1 .. 2**31 - 1) cannot name a row, so
    the lookup returns None without querying.
"""

from typing import Optional, Union

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.models.project import Project
from taskhub.models.task import Task

MAX_ROW_ID = 2**31 - 1

ResourceId = Union[int, str]


def coerce_id(value: ResourceId) -> Optional[int]:
    """Returns the id as an int, or None if no row can have it."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()):
            return None
        value = int(value)
    if not isinstance(value, int) or not 1 <= value <= MAX_ROW_ID:
        return None
    return value


def owned_projects(user_id: int) -> Select:
    """SELECT projects WHERE user_id = :user_id"""
    return select(Project).where(Project.user_id == user_id).order_by(Project.id)


def owned_project(project_id: int, user_id: int) -> Select:
    """SELECT projects WHERE id = :project_id AND user_id = :user_id"""
    return select(Project).where(Project.id == project_id, Project.user_id == user_id)


def owned_tasks(user_id: int) -> Select:
    """SELECT tasks JOIN projects WHERE projects.user_id = :user_id"""
    return (
        select(Task)
        .join(Project, Task.project_id == Project.id)
        .where(Project.user_id == user_id)
        .order_by(Task.id)
    )


def owned_task(task_id: int, user_id: int) -> Select:
    return (
        select(Task)
        .join(Project, Task.project_id == Project.id)
        .where(Task.id == task_id, Project.user_id == user_id)
    )


async def find_owned_project(
    db: AsyncSession, project_id: ResourceId, user_id: int
) -> Optional[Project]:
    pk = coerce_id(project_id)
    if pk is None:
        return None
    result = await db.execute(owned_project(pk, user_id))
    return result.scalar_one_or_none()


async def find_owned_task(db: AsyncSession, task_id: ResourceId, user_id: int) -> Optional[Task]:
    pk = coerce_id(task_id)
    if pk is None:
        return None
    result = await db.execute(owned_task(pk, user_id))
    return result.scalar_one_or_none()
