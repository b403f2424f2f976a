"""
TaskHub Backend — Project Service
===================================

What:  Owner-scoped CRUD for projects.
Who:   Called by the /api/projects route handlers with the caller's user id.

Every read and every write starts from a lookup filtered on
`{id, user_id}` (taskhub.services.scoping). If that lookup finds nothing
the operation stops with NotFoundError; nothing is mutated.

Deletion cascades: a project's tasks are deleted together with it, inside
the request transaction, so no task is ever left without a project.
"""

import logging
from typing import List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.exceptions import DatabaseError, NotFoundError
from taskhub.models.project import Project
from taskhub.models.task import Task
from taskhub.schemas.project import ProjectResponse, ProjectWrite
from taskhub.services.scoping import ResourceId, find_owned_project, owned_projects

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Business logic for projects.

    Error Handling Strategy:
        SQLAlchemy errors are logged with their traceback and re-raised as
        DatabaseError carrying a generic message. NotFoundError propagates
        untouched.
    """

    async def list_projects(self, db: AsyncSession, user_id: int) -> List[ProjectResponse]:
        try:
            result = await db.execute(owned_projects(user_id))
            projects = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing projects: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch projects")

        return [ProjectResponse.model_validate(p) for p in projects]

    async def get_project(
        self, db: AsyncSession, user_id: int, project_id: ResourceId
    ) -> ProjectResponse:
        project = await self._get_owned(db, user_id, project_id, "Failed to fetch project")
        return ProjectResponse.model_validate(project)

    async def create_project(
        self, db: AsyncSession, user_id: int, payload: ProjectWrite
    ) -> ProjectResponse:
        """
        Persist a new project owned by `user_id`.

        The owner is never read from the payload.
        """
        try:
            project = Project(
                name=payload.name,
                description=payload.description,
                status=payload.status,
                due_date=payload.due_date,
                user_id=user_id,
            )
            db.add(project)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating project: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create project")

        logger.info("Project %s created by user %s", project.id, user_id)
        return ProjectResponse.model_validate(project)

    async def update_project(
        self, db: AsyncSession, user_id: int, project_id: ResourceId, payload: ProjectWrite
    ) -> ProjectResponse:
        """
        Replace a project's writable fields.

        All four fields are overwritten; the owner is left alone.

        Raises:
            NotFoundError: no project with this id belongs to the caller
        """
        project = await self._get_owned(db, user_id, project_id, "Failed to update project")

        try:
            project.name = payload.name
            project.description = payload.description
            project.status = payload.status
            project.due_date = payload.due_date
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating project %s: %s", project_id, str(e), exc_info=True)
            raise DatabaseError(message="Failed to update project")

        logger.info("Project %s updated by user %s", project_id, user_id)
        return ProjectResponse.model_validate(project)

    async def delete_project(self, db: AsyncSession, user_id: int, project_id: ResourceId) -> int:
        """
        Delete a project and its tasks.

        Returns:
            Number of tasks removed with the project.
        Raises:
            NotFoundError: no project with this id belongs to the caller
        """
        project = await self._get_owned(db, user_id, project_id, "Failed to delete project")

        try:
            result = await db.execute(delete(Task).where(Task.project_id == project.id))
            await db.delete(project)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting project %s: %s", project_id, str(e), exc_info=True)
            raise DatabaseError(message="Failed to delete project")

        removed_tasks = result.rowcount or 0
        logger.info(
            "Project %s deleted by user %s (%d tasks removed)", project_id, user_id, removed_tasks
        )
        return removed_tasks

    async def _get_owned(
        self, db: AsyncSession, user_id: int, project_id: ResourceId, failure_message: str
    ) -> Project:
        try:
            project = await find_owned_project(db, project_id, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching project %s: %s", project_id, str(e), exc_info=True)
            raise DatabaseError(message=failure_message, context={"project_id": project_id})

        if project is None:
            raise NotFoundError(resource="Project", resource_id=project_id)
        return project


project_service = ProjectService()
