"""
Application settings loaded from environment variables.
"""

import logging
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "dev-only-jwt-secret-change-me"


class Settings(BaseSettings):
    environment: str = "development"

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: Optional[str] = None     # HMAC secret for bearer tokens
    jwt_expiry_seconds: int = 86400      # 24 hours
    bcrypt_rounds: int = 10

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./tasks.db"

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    seed_demo_user: bool = True

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev")

    @model_validator(mode="after")
    def check_jwt_secret(self) -> "Settings":
        """
        Refuse to start outside development without a real signing secret.
        """
        if self.is_development:
            if not self.jwt_secret:
                logger.warning(
                    "JWT_SECRET not set — using the development secret. "
                    "Never run like this in production."
                )
                self.jwt_secret = DEV_JWT_SECRET
            return self

        if not self.jwt_secret or self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError(
                f"JWT_SECRET must be set to a private value when ENVIRONMENT={self.environment!r}"
            )
        return self


config = Settings()
