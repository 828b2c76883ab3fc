"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

import bcrypt

from config.settings import config

# bcrypt ignores everything past 72 bytes; newer releases raise instead.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt (auto-salted, work factor from config)."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError, AttributeError):
        return False


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return hash_password("not-a-real-password", rounds=rounds)


def dummy_password_hash() -> str:
    """A valid hash at the configured cost, for checks against unknown users."""
    return _dummy_hash(config.bcrypt_rounds)
