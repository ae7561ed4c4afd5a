"""
User routes — listing, editing, health ping and random seed users.
"""

from __future__ import annotations

import logging
import random
import string
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session, get_settings, templates
from auth.dependencies import Identity, require_identity
from auth.password import hash_password
from config.settings import Settings
from database.helpers import (
    count_users,
    create_user,
    get_user_by_id,
    list_users,
    ping,
    update_user,
)
from utils.errors import AuthError, NotFoundError, StoreError
from utils.pagination import page_window
from utils.schemas import CreatedUserResponse, PingResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

NOT_OWNER = "Access forbidden: Not the owner"
_BASE36 = string.digits + string.ascii_lowercase


def _random_token(length: int) -> str:
    # Seed data only; not suitable for secrets.
    return "".join(random.choices(_BASE36, k=length))


def _check_owner(identity: Identity, user_id: int, settings: Settings) -> None:
    if settings.edit_requires_owner and identity.user_id != user_id:
        logger.info("User %s denied edit of user %s", identity.user_id, user_id)
        raise AuthError(NOT_OWNER)


@router.get("/", response_class=HTMLResponse)
async def list_users_page(
    request: Request,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
):
    """Paginated user list with Previous / Next links."""
    window = page_window(
        page,
        limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    try:
        users = await list_users(session, limit=window.limit, offset=window.offset)
        total = await count_users(session)
    except SQLAlchemyError as exc:
        raise StoreError("Error retrieving users") from exc

    return templates.TemplateResponse(
        request,
        "users.html",
        {
            "users": users,
            "page": window.page,
            "limit": window.limit,
            "total_pages": window.total_pages(total),
            "has_previous": window.has_previous(),
            "has_next": window.has_next(total),
        },
    )


@router.get("/edit/{user_id}", response_class=HTMLResponse)
async def edit_form(
    request: Request,
    user_id: int,
    identity: Identity = Depends(require_identity),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
):
    _check_owner(identity, user_id, settings)
    try:
        user = await get_user_by_id(session, user_id)
    except SQLAlchemyError as exc:
        raise StoreError("Error retrieving user") from exc
    if user is None:
        raise NotFoundError("User not found")

    return templates.TemplateResponse(request, "edit.html", {"user": user})


@router.post("/edit/{user_id}", response_class=PlainTextResponse)
async def edit_user(
    user_id: int,
    username: str = Form(...),
    name: Optional[str] = Form(None),
    identity: Identity = Depends(require_identity),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> str:
    _check_owner(identity, user_id, settings)
    # An empty name clears it.
    name = name or None
    try:
        user = await update_user(session, user_id, name=name, username=username)
        await session.commit()
    except SQLAlchemyError as exc:
        raise StoreError("Error updating user") from exc
    if user is None:
        raise NotFoundError("User not found")

    logger.info("User %s updated by %s", user_id, identity.user_id)
    return "User updated"


@router.get("/ping", response_model=PingResponse)
async def ping_store(session: AsyncSession = Depends(db_session)) -> Dict[str, Any]:
    try:
        return await ping(session)
    except SQLAlchemyError as exc:
        raise StoreError("Store unavailable") from exc


@router.get("/create", response_model=CreatedUserResponse)
async def create_random_user(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Insert a user with random name, username and password (test seeding)."""
    name = _random_token(5)
    username = f"user_{_random_token(5)}"
    password_hash = hash_password(_random_token(8), rounds=settings.bcrypt_rounds)
    try:
        user = await create_user(session, username=username, password_hash=password_hash, name=name)
        await session.commit()
    except SQLAlchemyError as exc:
        raise StoreError("Error creating random user") from exc

    logger.info("Created random user %s (%s)", username, user.id)
    return {"message": "Random user created", "userId": user.id}
