"""
Database helper functions — user lookups and writes.

Each helper issues one statement on the given session.  Callers decide
when to commit.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    return await session.get(User, user_id)


async def create_user(
    session: AsyncSession,
    username: str,
    password_hash: str,
    name: str | None = None,
) -> User:
    """Insert a user row and flush so the generated ``id`` is populated."""
    user = User(username=username, name=name, password_hash=password_hash)
    session.add(user)
    await session.flush()
    logger.debug("Inserted user %s (id=%s)", username, user.id)
    return user


async def update_user(
    session: AsyncSession,
    user_id: int,
    name: str | None,
    username: str,
) -> Optional[User]:
    """Update ``name`` and ``username``; returns ``None`` when the id is unknown."""
    user = await session.get(User, user_id)
    if user is None:
        return None
    user.name = name
    user.username = username
    await session.flush()
    return user


async def list_users(session: AsyncSession, limit: int, offset: int) -> List[User]:
    result = await session.execute(
        select(User).order_by(User.id).limit(limit).offset(offset)
    )
    return list(result.scalars().all())


async def count_users(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(User))
    return int(result.scalar_one())


async def ping(session: AsyncSession) -> Dict[str, Any]:
    """Round-trip a literal through the store."""
    result = await session.execute(text("SELECT 'hello world' AS \"RESULT\""))
    row = result.mappings().first()
    return dict(row) if row is not None else {}
