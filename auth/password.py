"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a configurable work factor (``config.bcrypt_cost``).
"""

from __future__ import annotations

from typing import Optional

import bcrypt

from config.settings import config

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt (auto-salted, work factor from config)."""
    cost = rounds if rounds is not None else config.bcrypt_cost
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=cost)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    password_hash = password_hash.strip()
    if not password or not password_hash:
        return False
    if not password_hash.startswith(BCRYPT_PREFIXES):
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
