"""
Request validators for the profile API.

Each ``validate_*`` function raises ``ValidationError`` (HTTP 400) on the
first problem it finds and returns ``None`` otherwise.
"""

from __future__ import annotations

from typing import Optional

from auth.password import BCRYPT_MAX_BYTES
from config.settings import config
from utils.errors import ValidationError
from utils.schemas import (
    ChangePasswordRequest,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
)

DISPLAY_MODES = ("light", "dark")


def is_valid_email(email: str) -> bool:
    """Basic shape check: one ``@``, non-empty local part, dotted domain."""
    if len(email) < 3:
        return False
    parts = email.split("@")
    if len(parts) != 2:
        return False
    local, domain = parts
    if not local or not domain:
        return False
    return "." in domain


def normalize_display_mode(display_mode: str) -> str:
    """Return the lowercase display mode, or raise if it is not supported."""
    normalized = display_mode.strip().lower()
    if normalized not in DISPLAY_MODES:
        raise ValidationError("displayMode must be 'light' or 'dark'")
    return normalized


def validate_update_profile_request(req: UpdateProfileRequest) -> None:
    if req.name and not req.name.strip():
        raise ValidationError("name cannot be empty or whitespace only")
    if req.email:
        email = req.email.strip()
        if not email:
            raise ValidationError("email cannot be empty or whitespace only")
        if not is_valid_email(email):
            raise ValidationError("invalid email format")


def validate_change_password_request(
    req: ChangePasswordRequest,
    min_length: Optional[int] = None,
) -> None:
    minimum = config.min_password_length if min_length is None else min_length
    password = req.new_password.strip()
    if not password:
        raise ValidationError("new password cannot be empty")
    # Length is measured in UTF-8 bytes.
    size = len(password.encode())
    if size < minimum:
        raise ValidationError(
            f"password must be at least {minimum} characters long"
        )
    if size > BCRYPT_MAX_BYTES:
        raise ValidationError(
            f"password must be at most {BCRYPT_MAX_BYTES} bytes long"
        )


def validate_update_preferences_request(req: UpdatePreferencesRequest) -> None:
    if req.display_mode:
        normalize_display_mode(req.display_mode)
