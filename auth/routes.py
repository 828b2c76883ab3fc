"""
Auth API routes — register, login, me.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_store
from auth.dependencies import get_current_identity
from auth.jwt import create_token
from auth.password import dummy_password_hash, hash_password, verify_password
from database.models import User
from database.stores import UserStore
from utils.errors import ConflictError
from utils.schemas import AuthResponse, Credentials, TokenIdentity, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _auth_payload(user: User) -> Dict[str, Any]:
    return {
        "token": create_token(user.id, user.username),
        "user": UserPublic.model_validate(user),
    }


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: Credentials,
    users: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Register a new user and log them straight in."""
    try:
        user = await users.create(req.username, hash_password(req.password))
    except ConflictError:
        logger.info("Registration rejected, username taken: %s", req.username)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        )

    logger.info("Registered user %s (%s)", user.username, user.id)
    return _auth_payload(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: Credentials,
    users: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Login with username + password."""
    user = await users.get_by_username(req.username)

    # unknown usernames still pay for a bcrypt check
    stored_hash = user.password_hash if user is not None else dummy_password_hash()
    password_ok = verify_password(req.password, stored_hash)

    if user is None or not password_ok:
        logger.info("Failed login for %s", req.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    logger.info("Login: %s (%s)", user.username, user.id)
    return _auth_payload(user)


@router.get("/me", response_model=UserPublic)
async def me(
    identity: TokenIdentity = Depends(get_current_identity),
    users: UserStore = Depends(get_user_store),
) -> User:
    user = await users.get_by_id(identity.id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user
