"""
Auth routes — register, login and the protected probe route.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Form, Request, Response, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session, get_settings, templates
from auth.dependencies import Identity, require_identity
from auth.jwt import create_token
from auth.password import hash_password, verify_password
from config.settings import Settings
from database.helpers import create_user, get_user_by_username
from utils.errors import CredentialsError, StoreError
from utils.schemas import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"


@router.get("/register", response_class=HTMLResponse)
async def register_form(request: Request):
    return templates.TemplateResponse(request, "register.html", {})


@router.post("/register", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
async def register(
    username: str = Form(...),
    password: str = Form(...),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> str:
    """Register a new user."""
    password_hash = hash_password(password, rounds=settings.bcrypt_rounds)
    try:
        user = await create_user(session, username=username, password_hash=password_hash)
        await session.commit()
    except SQLAlchemyError as exc:
        raise StoreError("Error registering user") from exc

    logger.info("Registered user %s (%s)", username, user.id)
    return "User registered"


@router.get("/login", response_class=HTMLResponse)
async def login_form(request: Request):
    return templates.TemplateResponse(request, "login.html", {})


@router.post(
    "/login",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def login(
    response: Response,
    username: str = Form(...),
    password: str = Form(...),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Login with username + password; the session token is set as a cookie."""
    try:
        user = await get_user_by_username(session, username)
    except SQLAlchemyError as exc:
        raise StoreError("Error logging in") from exc

    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", username)
        raise CredentialsError(INVALID_CREDENTIALS)

    token = create_token(user.id, settings.secret_key, ttl=settings.token_expiry_seconds)
    response.set_cookie(
        settings.cookie_name,
        token,
        max_age=settings.token_expiry_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    logger.info("Login: %s (%s)", user.username, user.id)
    return {"message": "Logged in successfully"}


@router.get("/protected", response_class=PlainTextResponse)
async def protected(identity: Identity = Depends(require_identity)) -> str:
    return "This is a protected route"
