"""
FastAPI dependencies for authentication.

Provides ``db_session`` and ``get_current_identity`` dependencies that
are used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import verify_token
from database.session import get_db_session
from utils.errors import InvalidTokenError, TokenExpiredError
from utils.schemas import TokenIdentity

# auto_error=False so a missing header is a 401, not FastAPI's default 403.
_bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> TokenIdentity:
    """
    Extract and verify the Bearer token, returning the identity it carries.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Unauthorized")
    try:
        return verify_token(credentials.credentials)
    except TokenExpiredError:
        raise _unauthorized("Token expired")
    except InvalidTokenError:
        raise _unauthorized("Invalid token")
