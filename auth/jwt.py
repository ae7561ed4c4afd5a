"""
JWT session token creation and verification.

Tokens are HS256-signed JWTs carrying ``userId``, ``iat`` and ``exp``.
Verification never raises; it returns either ``TokenValid`` or
``TokenInvalid`` so callers can branch on the outcome.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from jose import ExpiredSignatureError, JWTError, jwt

ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 3600


@dataclass(frozen=True)
class TokenValid:
    user_id: int
    claims: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TokenInvalid:
    reason: str  # "expired" | "invalid"


TokenResult = Union[TokenValid, TokenInvalid]


def create_token(
    user_id: int,
    secret: str,
    ttl: int = DEFAULT_TTL_SECONDS,
    now: Optional[int] = None,
) -> str:
    """Create a signed token containing ``userId`` and an absolute expiry."""
    issued_at = int(time.time()) if now is None else int(now)
    claims = {
        "userId": user_id,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> TokenResult:
    """Check signature and expiry of ``token`` against ``secret``."""
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        return TokenInvalid("expired")
    except JWTError:
        return TokenInvalid("invalid")

    user_id = claims.get("userId")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        return TokenInvalid("invalid")
    return TokenValid(user_id=user_id, claims=claims)
