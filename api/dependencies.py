"""
FastAPI dependencies (shared across routes).

Stores are built per request around the request's DB session.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from database.stores import TaskStore, UserStore


async def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


async def get_task_store(session: AsyncSession = Depends(db_session)) -> TaskStore:
    return TaskStore(session)
