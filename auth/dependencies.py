"""
FastAPI dependencies for authentication and authorization.

Provides ``db_session``, ``get_current_user_id`` and
``get_authorized_user_id`` dependencies used by every profile route.
FastAPI resolves ``get_current_user_id`` before the ``id`` check, so a
request without a valid token gets 401 even when ``id`` is also missing.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import verify_token
from database.session import get_db_session
from utils.errors import AuthenticationError, AuthorizationError, ValidationError

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_user_id(
    authorization: Optional[str] = Header(default=None),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id``.
    """
    if not authorization:
        raise AuthenticationError("missing authorization header")
    if not authorization.startswith(_BEARER_PREFIX):
        raise AuthenticationError("invalid authorization format")
    return verify_token(authorization[len(_BEARER_PREFIX):])


async def get_authorized_user_id(
    user_id: Optional[str] = Query(default=None, alias="id"),
    token_user_id: str = Depends(get_current_user_id),
) -> str:
    """
    Return the ``id`` query parameter once it is known to match the
    authenticated user.
    """
    requested = (user_id or "").strip()
    if not requested:
        raise ValidationError(
            "missing or invalid 'id' query parameter: query parameter 'id' not found"
        )
    if requested != token_user_id:
        logger.warning(
            "Rejected cross-user access: token user %s requested %s",
            token_user_id, requested,
        )
        raise AuthorizationError("unauthorized: can only access your own resources")
    return requested
