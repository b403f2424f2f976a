"""
TaskHub Backend — Task Service
================================

What:  Owner-scoped CRUD for tasks.
Who:   Called by the /api/tasks route handlers with the caller's user id.

Tasks are owned through their project, so lookups join `projects` and filter
on the project's `user_id`. Two rules apply on top of that:

    Create:  the target projectId must belong to the caller
             (checked before insert; ValidationError → 400 otherwise)
    Update:  moving a task to another projectId requires that project to
             belong to the caller as well

Both a foreign project and a non-existent one fail identically, so the
400 response reveals nothing about other users' projects.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.exceptions import DatabaseError, NotFoundError, ValidationError
from taskhub.models.task import Task
from taskhub.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskhub.services.scoping import (
    ResourceId,
    find_owned_project,
    find_owned_task,
    owned_tasks,
)

logger = logging.getLogger(__name__)

INVALID_PROJECT_MESSAGE = "Invalid projectId for this user."


class TaskService:
    """Business logic for tasks. Stateless."""

    async def list_tasks(self, db: AsyncSession, user_id: int) -> List[TaskResponse]:
        try:
            result = await db.execute(owned_tasks(user_id))
            tasks = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing tasks: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch tasks")

        return [TaskResponse.model_validate(t) for t in tasks]

    async def get_task(self, db: AsyncSession, user_id: int, task_id: ResourceId) -> TaskResponse:
        task = await self._get_owned(db, user_id, task_id, "Failed to fetch task")
        return TaskResponse.model_validate(task)

    async def create_task(self, db: AsyncSession, user_id: int, payload: TaskCreate) -> TaskResponse:
        """
        Persist a task under one of the caller's projects.

        Raises:
            ValidationError: projectId is missing, unknown, or not the caller's
        """
        await self._require_owned_project(db, user_id, payload.project_id, "Failed to create task")

        try:
            task = Task(
                title=payload.title,
                description=payload.description,
                completed=payload.completed,
                priority=payload.priority,
                due_date=payload.due_date,
                project_id=payload.project_id,
            )
            db.add(task)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating task: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create task")

        logger.info("Task %s created in project %s by user %s", task.id, task.project_id, user_id)
        return TaskResponse.model_validate(task)

    async def update_task(
        self, db: AsyncSession, user_id: int, task_id: ResourceId, payload: TaskUpdate
    ) -> TaskResponse:
        """
        Replace a task's writable fields, optionally moving it.

        Raises:
            NotFoundError: no task with this id is visible to the caller
            ValidationError: the new projectId is not the caller's
        """
        task = await self._get_owned(db, user_id, task_id, "Failed to update task")

        target_project_id = task.project_id
        if payload.project_id is not None and payload.project_id != task.project_id:
            await self._require_owned_project(
                db, user_id, payload.project_id, "Failed to update task"
            )
            target_project_id = payload.project_id

        try:
            task.title = payload.title
            task.description = payload.description
            task.completed = payload.completed
            task.priority = payload.priority
            task.due_date = payload.due_date
            task.project_id = target_project_id
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating task %s: %s", task_id, str(e), exc_info=True)
            raise DatabaseError(message="Failed to update task")

        logger.info("Task %s updated by user %s", task_id, user_id)
        return TaskResponse.model_validate(task)

    async def delete_task(self, db: AsyncSession, user_id: int, task_id: ResourceId) -> None:
        task = await self._get_owned(db, user_id, task_id, "Failed to delete task")

        try:
            await db.delete(task)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting task %s: %s", task_id, str(e), exc_info=True)
            raise DatabaseError(message="Failed to delete task")

        logger.info("Task %s deleted by user %s", task_id, user_id)

    async def _get_owned(
        self, db: AsyncSession, user_id: int, task_id: ResourceId, failure_message: str
    ) -> Task:
        try:
            task = await find_owned_task(db, task_id, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching task %s: %s", task_id, str(e), exc_info=True)
            raise DatabaseError(message=failure_message, context={"task_id": task_id})

        if task is None:
            raise NotFoundError(resource="Task", resource_id=task_id)
        return task

    async def _require_owned_project(
        self, db: AsyncSession, user_id: int, project_id: int, failure_message: str
    ) -> None:
        try:
            project = await find_owned_project(db, project_id, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error checking project %s: %s", project_id, str(e), exc_info=True)
            raise DatabaseError(message=failure_message, context={"project_id": project_id})

        if project is None:
            raise ValidationError(
                message=INVALID_PROJECT_MESSAGE,
                field="projectId",
                context={"project_id": project_id},
            )


task_service = TaskService()
