"""
User and task stores: thin data-access objects over an ``AsyncSession``.

Every task query is owner-scoped: the predicate always carries both the
task id and the caller's user id, so a foreign task id behaves exactly
like a missing one.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, User
from utils.errors import ConflictError

logger = logging.getLogger(__name__)

_UPDATABLE_TASK_FIELDS = ("title", "description", "is_completed")


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(self, username: str, password_hash: str) -> User:
        """
        Insert a new user.

        Uniqueness is left to the ``users.username`` constraint, so two
        concurrent registrations cannot both succeed.  Raises
        ``ConflictError`` when the username is taken.
        """
        user = User(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(f"username {username!r} already exists") from exc
        return user


class TaskStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get_owned(self, task_id: int, user_id: int) -> Optional[Task]:
        result = await self.session.execute(
            select(Task).where(Task.id == task_id, Task.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(self, user_id: int) -> List[Task]:
        result = await self.session.execute(
            select(Task).where(Task.user_id == user_id).order_by(Task.id)
        )
        return list(result.scalars().all())

    async def create(
        self,
        user_id: int,
        title: str,
        description: Optional[str] = None,
        is_completed: bool = False,
    ) -> Task:
        task = Task(
            user_id=user_id,
            title=title,
            description=description,
            is_completed=is_completed,
        )
        self.session.add(task)
        await self.session.flush()
        logger.debug("Created task %s for user %s", task.id, user_id)
        return task

    async def update(
        self,
        task_id: int,
        user_id: int,
        fields: Mapping[str, Any],
    ) -> Optional[Task]:
        """Apply the given fields; ``None`` if the user owns no such task."""
        task = await self._get_owned(task_id, user_id)
        if task is None:
            return None

        changes: Dict[str, Any] = {
            k: v for k, v in fields.items() if k in _UPDATABLE_TASK_FIELDS
        }
        for key, value in changes.items():
            setattr(task, key, value)
        if changes:
            await self.session.flush()
            logger.debug("Updated task %s (%s)", task_id, ", ".join(changes))
        return task

    async def delete(self, task_id: int, user_id: int) -> None:
        """Delete if owned by ``user_id``; a no-op otherwise."""
        result = await self.session.execute(
            delete(Task).where(Task.id == task_id, Task.user_id == user_id)
        )
        logger.debug("Delete task %s for user %s: %d row(s)", task_id, user_id, result.rowcount)
