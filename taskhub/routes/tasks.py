"""
TaskHub Backend — Task Route Handlers
=======================================

What:  /api/tasks CRUD. Every route requires a session.

Status codes beyond the usual 401/404:
    400 — projectId (on create, or a new one on update) is not one of the
          caller's projects

A `{task_id}` that is not a valid row id ("abc", too large) is a 404.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.database import commit_session, get_db_session
from taskhub.dependencies import require_identity
from taskhub.schemas.common import ErrorResponse, MessageResponse
from taskhub.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskhub.schemas.user import UserResponse
from taskhub.services.task_service import task_service

router = APIRouter(
    prefix="/api/tasks",
    tags=["Tasks"],
    responses={
        401: {"description": "No active session", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)

_NOT_FOUND = {404: {"description": "Task not found", "model": ErrorResponse}}
_BAD_PROJECT = {400: {"description": "Invalid body or projectId", "model": ErrorResponse}}


@router.get("", response_model=List[TaskResponse], summary="List tasks in the caller's projects")
async def list_tasks(
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[TaskResponse]:
    return await task_service.list_tasks(db, identity.id)


@router.get("/{task_id}", response_model=TaskResponse, responses=_NOT_FOUND)
async def get_task(
    task_id: str,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    return await task_service.get_task(db, identity.id, task_id)


@router.post(
    "",
    status_code=201,
    response_model=TaskResponse,
    responses=_BAD_PROJECT,
    summary="Create a task in one of the caller's projects",
)
async def create_task(
    payload: TaskCreate,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    task = await task_service.create_task(db, identity.id, payload)
    await commit_session(db)
    return task


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**_NOT_FOUND, **_BAD_PROJECT},
    summary="Replace a task's fields, optionally moving it to another project",
)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> TaskResponse:
    task = await task_service.update_task(db, identity.id, task_id, payload)
    await commit_session(db)
    return task


@router.delete("/{task_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_task(
    task_id: str,
    identity: UserResponse = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await task_service.delete_task(db, identity.id, task_id)
    await commit_session(db)
    return MessageResponse(message="Task deleted successfully")
