"""
Domain exceptions raised below the HTTP layer.

Routes and dependencies translate these into ``HTTPException`` with the
matching status code.
"""


class ConflictError(Exception):
    """A unique constraint rejected the write (e.g. duplicate username)."""


class TokenError(Exception):
    """Base class for bearer-token verification failures."""


class InvalidTokenError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass
