"""
JWT creation and verification.

Tokens are issued by the external auth service and signed with a shared
HMAC secret loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
Only the algorithms listed in ``config.jwt_algorithms`` are accepted, so a
token signed with ``none`` or an asymmetric algorithm is always rejected.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

import jwt

from config.settings import config
from utils.errors import AuthenticationError

logger = logging.getLogger(__name__)


def create_token(
    user_id: str,
    expires_in: Optional[int] = None,
    *,
    secret: Optional[str] = None,
    algorithm: str = "HS256",
) -> str:
    """Create a signed token containing ``user_id`` and expiry."""
    now = int(time.time())
    lifetime = config.jwt_expiry_seconds if expires_in is None else expires_in
    payload = {
        "user_id": user_id,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, secret or config.jwt_secret, algorithm=algorithm)


def verify_token(
    token: str,
    *,
    secret: Optional[str] = None,
    algorithms: Optional[Sequence[str]] = None,
) -> str:
    """
    Verify token and return the subject ``user_id``.

    Raises ``AuthenticationError`` on a bad signature, a disallowed
    algorithm, an expired token, a malformed token or a missing subject.
    """
    logger.debug("Validating token (length=%d)", len(token))
    try:
        claims = jwt.decode(
            token,
            secret or config.jwt_secret,
            algorithms=list(algorithms or config.jwt_algorithms),
        )
        user_id = claims.get("user_id") or claims.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise jwt.InvalidTokenError("token has no subject")
    except jwt.PyJWTError as exc:
        logger.debug("Token validation failed: %s", exc)
        raise AuthenticationError(
            f"invalid or expired token - validation error: {exc}"
        ) from exc

    logger.debug("Token validated for user %s", user_id)
    return user_id
