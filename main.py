"""
Task Manager API — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as task_router
from auth.password import hash_password
from auth.routes import router as auth_router
from config.settings import config
from database.session import async_session_factory, init_models
from database.stores import UserStore
from utils.errors import ConflictError

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("aiosqlite", "sqlalchemy.engine", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "password"


async def seed_demo_user(session_factory=async_session_factory) -> None:
    """Create the ``demo`` / ``password`` account if it is missing."""
    async with session_factory() as session:
        users = UserStore(session)
        if await users.get_by_username(DEMO_USERNAME) is not None:
            return
        try:
            await users.create(DEMO_USERNAME, hash_password(DEMO_PASSWORD))
            await session.commit()
        except ConflictError:
            # another worker seeded it first
            return
    logger.info("Seeded demo user: %s / %s", DEMO_USERNAME, DEMO_PASSWORD)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Task Manager API",
        version="1.0.0",
        description="Personal task lists behind bearer-token auth.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(task_router, prefix="/api")

    @app.on_event("startup")
    async def on_startup():
        logger.info("Creating tables…")
        await init_models()

        if config.seed_demo_user and config.is_development:
            await seed_demo_user()

        logger.info("Application ready to accept requests.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
