"""
Database helper functions — load, default and persist profile records, and
update the auth service's user records.

"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Tuple

from pydantic import ValidationError as SchemaError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import config
from database.kv_store import KeyValueStore
from utils.errors import KeyNotFoundError, MarshalError, StoreError
from utils.schemas import (
    DEFAULT_DISPLAY_MODE,
    DEFAULT_LANGUAGE,
    DEFAULT_ROLES,
    Preferences,
    UserProfile,
)

logger = logging.getLogger(__name__)


def profile_key(user_id: str) -> str:
    return f"{config.profile_key_prefix}{user_id}"


def auth_id_key(user_id: str) -> str:
    return f"{config.auth_id_key_prefix}{user_id}"


def auth_username_key(username: str) -> str:
    return f"{config.auth_username_key_prefix}{username}"


def create_default_profile(user_id: str, name: str = "", email: str = "") -> UserProfile:
    """Build the profile a user gets before they have saved anything."""
    return UserProfile(
        id=user_id,
        name=name,
        email=email,
        preferences=Preferences(
            language=DEFAULT_LANGUAGE,
            notifications=True,
            display_mode=DEFAULT_DISPLAY_MODE,
        ),
        roles=list(DEFAULT_ROLES),
    )


async def get_user_profile(session: AsyncSession, user_id: str) -> UserProfile:
    """
    Load a stored profile.

    Raises ``KeyNotFoundError`` when the user has no profile yet and
    ``MarshalError`` when the stored bytes do not decode to a profile.
    """
    data = await KeyValueStore(session, config.profile_bucket).get(profile_key(user_id))
    try:
        return UserProfile.model_validate_json(data)
    except SchemaError as exc:
        raise MarshalError(f"stored profile for {user_id} is unreadable: {exc}") from exc


async def save_user_profile(session: AsyncSession, profile: UserProfile) -> None:
    """Write *profile* under its id and commit."""
    store = KeyValueStore(session, config.profile_bucket)
    await store.put(profile_key(profile.id), profile.to_json())
    await store.commit()


async def get_or_default_profile(
    session: AsyncSession,
    user_id: str,
) -> Tuple[UserProfile, bool]:
    """
    Return ``(profile, created)``.

    ``created`` is True when no profile was stored and a default one was
    synthesized; the caller decides whether to persist it.
    """
    try:
        return await get_user_profile(session, user_id), False
    except KeyNotFoundError:
        logger.debug("No profile stored for %s, using defaults", user_id)
        return create_default_profile(user_id), True


async def update_password_in_auth_db(
    session: AsyncSession,
    user_id: str,
    password_hash: str,
) -> None:
    """
    Replace the password hash in both copies of the auth service's user
    record (keyed by id and by username).

    Both writes go through the same session and are committed once, so the
    two copies cannot diverge.
    """
    store = KeyValueStore(session, config.auth_bucket)
    raw = await store.get(auth_id_key(user_id))
    try:
        record: Dict[str, Any] = json.loads(raw)
    except ValueError as exc:
        raise MarshalError(f"auth record for {user_id} is unreadable: {exc}") from exc
    if not isinstance(record, dict):
        raise MarshalError(f"auth record for {user_id} is not an object")

    username = record.get("username")
    if not isinstance(username, str) or not username:
        raise StoreError(f"auth record for {user_id} has no username")

    record["password"] = password_hash
    updated = json.dumps(record).encode()

    await store.put(auth_id_key(user_id), updated)
    await store.put(auth_username_key(username), updated)
    await store.commit()
    logger.info("Updated password for user %s (%s)", user_id, username)
