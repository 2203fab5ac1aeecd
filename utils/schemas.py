"""
Pydantic schemas for profiles and the profile API request bodies.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


DEFAULT_LANGUAGE = "en"
DEFAULT_DISPLAY_MODE = "light"
DEFAULT_ROLES = ("buyer",)


# ═══════════════════════════════════════════════════════════════════════════════
# Stored records
# ═══════════════════════════════════════════════════════════════════════════════


class Preferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    language: Optional[str] = None
    notifications: Optional[bool] = None
    display_mode: Optional[str] = Field(default=None, alias="displayMode")  # "light" | "dark"


class UserProfile(BaseModel):
    """A user's profile record, stored as JSON under ``/users/profiles/<id>``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    address: Optional[str] = None
    preferences: Preferences = Field(default_factory=Preferences)
    roles: List[str] = Field(default_factory=list)

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()


# ═══════════════════════════════════════════════════════════════════════════════
# Request bodies
# ═══════════════════════════════════════════════════════════════════════════════


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_password: str = Field(default="", alias="newPassword")


class UpdatePreferencesRequest(BaseModel):
    """
    ``notifications`` keeps three states: absent (``None``) leaves the stored
    flag alone, while an explicit ``false`` overwrites it.
    """

    model_config = ConfigDict(populate_by_name=True)

    language: Optional[str] = None
    notifications: Optional[StrictBool] = None
    display_mode: Optional[str] = Field(default=None, alias="displayMode")


class MessageResponse(BaseModel):
    message: str
