"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads ``{id, username, exp}``
signed with HMAC-SHA256.  Secret key is loaded from ``config.jwt_secret``
(env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

from pydantic import ValidationError

from config.settings import config
from utils.errors import InvalidTokenError, TokenExpiredError
from utils.schemas import TokenIdentity


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: int,
    username: str,
    *,
    secret: Optional[str] = None,
    expiry_seconds: Optional[int] = None,
) -> str:
    """Create a signed token containing the user identity and expiry."""
    if expiry_seconds is None:
        expiry_seconds = config.jwt_expiry_seconds
    payload = {
        "id": user_id,
        "username": username,
        "exp": int(time.time()) + expiry_seconds,
    }
    raw = json.dumps(payload).encode()
    sig = _sign(raw, secret or config.jwt_secret)
    return urlsafe_b64encode(raw).decode() + "." + sig


def verify_token(token: str, *, secret: Optional[str] = None) -> TokenIdentity:
    """
    Verify token and return the embedded identity.

    Raises ``InvalidTokenError`` on a bad format, signature or payload and
    ``TokenExpiredError`` once ``exp`` has passed.
    """
    parts = token.split(".", 1)
    if len(parts) != 2:
        raise InvalidTokenError("bad format")
    try:
        raw = urlsafe_b64decode(parts[0].encode())
    except ValueError as exc:
        raise InvalidTokenError("bad encoding") from exc

    expected_sig = _sign(raw, secret or config.jwt_secret)
    if not hmac.compare_digest(parts[1].encode(), expected_sig.encode()):
        raise InvalidTokenError("bad signature")

    try:
        payload = json.loads(raw)
        identity = TokenIdentity.model_validate(payload)
        exp = float(payload["exp"])
    except (ValueError, TypeError, KeyError, ValidationError) as exc:
        raise InvalidTokenError("malformed payload") from exc

    if exp <= time.time():
        raise TokenExpiredError("token expired")
    return identity
