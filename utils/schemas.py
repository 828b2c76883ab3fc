"""
Pydantic schemas for the task manager API.

Wire names are camelCase (``userId``, ``isCompleted``); snake_case is
accepted on input as well.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class Credentials(BaseModel):
    """Body of both ``/register`` and ``/login``."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class TokenIdentity(BaseModel):
    """Claims carried by a bearer token (minus ``exp``)."""

    id: int
    username: str


class UserPublic(_ApiModel):
    """What clients get to see of a user. Never the password hash."""

    id: int
    username: str


class AuthResponse(BaseModel):
    token: str
    user: UserPublic


# ═══════════════════════════════════════════════════════════════════════════════
# Tasks
# ═══════════════════════════════════════════════════════════════════════════════


class TaskCreate(_ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_completed: bool = False


class TaskUpdate(_ApiModel):
    """Partial update: only fields present in the body are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_completed: Optional[bool] = None

    @field_validator("title", "is_completed")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class TaskOut(_ApiModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    is_completed: bool
