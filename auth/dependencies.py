"""
FastAPI dependencies for authentication.

``require_identity`` is the auth gate used by every protected route: it
reads the session token from the cookie, falling back to the
``Authorization`` header, and rejects the request with 403 when the token
is missing, tampered with or expired.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from api.dependencies import get_settings
from auth.jwt import TokenInvalid, verify_token
from config.settings import Settings
from utils.errors import AuthError

logger = logging.getLogger(__name__)

NO_TOKEN = "Access forbidden: No token provided"
INVALID_TOKEN = "Access forbidden: Invalid token"


@dataclass(frozen=True)
class Identity:
    user_id: int
    claims: Dict[str, Any] = field(default_factory=dict)


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    """Cookie first, else the second segment of the ``Authorization`` header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    authorization = request.headers.get("authorization", "")
    parts = authorization.split(" ")
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return None


async def require_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Identity:
    token = extract_token(request, settings.cookie_name)
    if not token:
        raise AuthError(NO_TOKEN)

    result = verify_token(token, settings.secret_key)
    if isinstance(result, TokenInvalid):
        logger.info("Rejected %s token on %s", result.reason, request.url.path)
        raise AuthError(INVALID_TOKEN)

    identity = Identity(user_id=result.user_id, claims=result.claims)
    request.state.identity = identity
    return identity
