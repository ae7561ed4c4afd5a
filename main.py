"""
User management service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as users_router
from auth.routes import router as auth_router
from config.settings import Settings
from database.session import build_engine, build_session_factory, init_db

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "asyncio", "multipart"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.uses_default_secret:
            logger.warning("SECRET_KEY is not set; signing tokens with the insecure default")
        if settings.create_tables:
            await init_db(engine)
        logger.info("Application ready to accept requests.")
        yield
        await engine.dispose()
        logger.info("Database pool closed")

    app = FastAPI(
        title="User Management Service",
        version="1.0.0",
        description="Registration, login and user listing with JWT cookies.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    register_middleware(app)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)

    return app


if __name__ == "__main__":
    config = Settings()
    configure_logging(config)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
