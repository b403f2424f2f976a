"""
TaskHub Backend — Project Route Handlers
==========================================

What:  /api/projects CRUD. Every route requires a session.
How:   The Auth Guard supplies the identity; ProjectService scopes every
       query to `identity.id`. The `{project_id}` segment is taken as a
       string: an id that cannot exist ("abc", too large) is a 404 like any
       other project the caller does not own.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.database import commit_session, get_db_session
from taskhub.dependencies import require_identity
from taskhub.schemas.common import ErrorResponse, MessageResponse
from taskhub.schemas.project import ProjectResponse, ProjectWrite
from taskhub.schemas.user import UserResponse
from taskhub.services.project_service import project_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/projects",
    tags=["Projects"],
    responses={
        401: {"description": "No active session", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)

_NOT_FOUND = {404: {"description": "Project not found", "model": ErrorResponse}}


@router.get("", response_model=List[ProjectResponse], summary="List the caller's projects")
async def list_projects(
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProjectResponse]:
    return await project_service.list_projects(db, identity.id)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses=_NOT_FOUND,
    summary="Get one of the caller's projects",
)
async def get_project(
    project_id: str,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    return await project_service.get_project(db, identity.id, project_id)


@router.post(
    "",
    status_code=201,
    response_model=ProjectResponse,
    responses={400: {"description": "Invalid body", "model": ErrorResponse}},
    summary="Create a project owned by the caller",
)
async def create_project(
    payload: ProjectWrite,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    project = await project_service.create_project(db, identity.id, payload)
    await commit_session(db)
    return project


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={**_NOT_FOUND, 400: {"description": "Invalid body", "model": ErrorResponse}},
    summary="Replace a project's fields",
)
async def update_project(
    project_id: str,
    payload: ProjectWrite,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    project = await project_service.update_project(db, identity.id, project_id, payload)
    await commit_session(db)
    return project


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a project and its tasks",
)
async def delete_project(
    project_id: str,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await project_service.delete_project(db, identity.id, project_id)
    await commit_session(db)
    return MessageResponse(message="Project deleted successfully")
