"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

import pathlib
from typing import AsyncGenerator

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings
from database.session import get_db_session

TEMPLATES_DIR = pathlib.Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_settings(request: Request) -> Settings:
    """Settings object the application was built with."""
    return request.app.state.settings


async def db_session(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; committed or rolled back by ``get_db_session``."""
    yield session
