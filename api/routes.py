"""
Task API routes. All protected, all scoped to the caller.

Route prefix: /api
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from api.dependencies import get_task_store
from auth.dependencies import get_current_identity
from database.models import Task
from database.stores import TaskStore
from utils.schemas import TaskCreate, TaskOut, TaskUpdate, TokenIdentity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])

# tasks.id is a 32-bit INTEGER column
MAX_TASK_ID = 2**31 - 1


@router.get("/tasks", response_model=List[TaskOut])
async def list_tasks(
    identity: TokenIdentity = Depends(get_current_identity),
    tasks: TaskStore = Depends(get_task_store),
) -> List[Task]:
    return await tasks.list_by_owner(identity.id)


@router.post("/tasks", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: TaskCreate,
    identity: TokenIdentity = Depends(get_current_identity),
    tasks: TaskStore = Depends(get_task_store),
) -> Task:
    return await tasks.create(
        identity.id,
        title=body.title,
        description=body.description,
        is_completed=body.is_completed,
    )


@router.patch("/tasks/{task_id}", response_model=TaskOut)
async def update_task(
    body: TaskUpdate,
    task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
    identity: TokenIdentity = Depends(get_current_identity),
    tasks: TaskStore = Depends(get_task_store),
) -> Task:
    """Apply only the fields present in the request body."""
    task = await tasks.update(task_id, identity.id, body.model_dump(exclude_unset=True))
    if task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )
    return task


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
    identity: TokenIdentity = Depends(get_current_identity),
    tasks: TaskStore = Depends(get_task_store),
) -> Response:
    await tasks.delete(task_id, identity.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
