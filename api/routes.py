"""
Profile API routes.

Route prefix: /api/v1

Every route depends on ``get_authorized_user_id``, so by the time a handler
body runs the caller is authenticated and acting on its own ``id``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.middleware import decode_body
from auth.dependencies import db_session, get_authorized_user_id
from auth.password import hash_password
from database.helpers import (
    get_or_default_profile,
    save_user_profile,
    update_password_in_auth_db,
)
from utils.errors import StoreError
from utils.schemas import (
    ChangePasswordRequest,
    MessageResponse,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
    UserProfile,
)
from utils.validators import (
    normalize_display_mode,
    validate_change_password_request,
    validate_update_preferences_request,
    validate_update_profile_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

PASSWORD_CHANGED_MESSAGE = "password changed successfully"


async def _persist(session: AsyncSession, profile: UserProfile, failure: str) -> None:
    try:
        await save_user_profile(session, profile)
    except StoreError as exc:
        logger.error("Saving profile %s failed: %s", profile.id, exc.message)
        raise StoreError(failure) from exc


@router.get(
    "/users/profile",
    response_model=UserProfile,
    response_model_exclude_none=True,
)
async def get_profile(
    user_id: str = Depends(get_authorized_user_id),
    session: AsyncSession = Depends(db_session),
) -> UserProfile:
    """Return the caller's profile, creating the default one on first access."""
    profile, created = await get_or_default_profile(session, user_id)
    if created:
        await _persist(session, profile, "failed to create default profile")
        logger.info("Created default profile for %s", user_id)
    return profile


@router.api_route(
    "/users/profile",
    methods=["PUT", "POST"],
    response_model=UserProfile,
    response_model_exclude_none=True,
)
async def update_profile(
    request: Request,
    user_id: str = Depends(get_authorized_user_id),
    session: AsyncSession = Depends(db_session),
) -> UserProfile:
    """Overwrite the profile fields supplied as non-empty strings."""
    req = await decode_body(request, UpdateProfileRequest)
    validate_update_profile_request(req)

    profile, _ = await get_or_default_profile(session, user_id)
    if req.name:
        profile.name = req.name.strip()
    if req.email:
        profile.email = req.email.strip()
    if req.phone:
        profile.phone = req.phone.strip()
    if req.address:
        profile.address = req.address.strip()

    await _persist(session, profile, "failed to update profile")
    logger.info("Updated profile for %s", user_id)
    return profile


@router.api_route(
    "/users/password",
    methods=["PUT", "POST"],
    response_model=MessageResponse,
)
async def change_password(
    request: Request,
    user_id: str = Depends(get_authorized_user_id),
    session: AsyncSession = Depends(db_session),
) -> MessageResponse:
    """
    Hash the new password and write it to the auth service's user records.
    The profile record is not touched.
    """
    req = await decode_body(request, ChangePasswordRequest)
    validate_change_password_request(req)

    try:
        password_hash = hash_password(req.new_password.strip())
    except ValueError as exc:
        logger.error("Hashing password for %s failed: %s", user_id, exc)
        raise StoreError("failed to hash password") from exc

    try:
        await update_password_in_auth_db(session, user_id, password_hash)
    except StoreError as exc:
        logger.error("Updating password for %s failed: %s", user_id, exc.message)
        raise StoreError("failed to update password") from exc

    return MessageResponse(message=PASSWORD_CHANGED_MESSAGE)


@router.api_route(
    "/users/preferences",
    methods=["PUT", "POST"],
    response_model=UserProfile,
    response_model_exclude_none=True,
)
async def update_preferences(
    request: Request,
    user_id: str = Depends(get_authorized_user_id),
    session: AsyncSession = Depends(db_session),
) -> UserProfile:
    req = await decode_body(request, UpdatePreferencesRequest)
    validate_update_preferences_request(req)

    profile, _ = await get_or_default_profile(session, user_id)
    prefs = profile.preferences
    if req.language:
        prefs.language = req.language.strip()
    if req.notifications is not None:
        prefs.notifications = req.notifications
    if req.display_mode:
        prefs.display_mode = normalize_display_mode(req.display_mode)

    await _persist(session, profile, "failed to update preferences")
    logger.info("Updated preferences for %s", user_id)
    return profile
