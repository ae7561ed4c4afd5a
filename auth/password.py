"""
bcrypt digests for stored user passwords.

bcrypt only reads the first 72 bytes of its input, and current releases
refuse longer input outright, so both directions cut the UTF-8 encoding
to that length before calling into the library.
"""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Digest for the ``password_hash`` column; a new salt every call."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """``False`` for a wrong password or an unreadable digest."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
