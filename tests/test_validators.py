"""
Tests for request validation.
"""

import pytest

from utils.errors import ValidationError
from utils.schemas import (
    ChangePasswordRequest,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
)
from utils.validators import (
    is_valid_email,
    normalize_display_mode,
    validate_change_password_request,
    validate_update_preferences_request,
    validate_update_profile_request,
)


class TestIsValidEmail:
    @pytest.mark.parametrize(
        "email",
        ["test@example.com", "user.name@domain.co.uk", "a@b.c"],
    )
    def test_accepts(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        ["invalid", "invalid@", "@domain.com", "test@domain", "", "a@b@c.d"],
    )
    def test_rejects(self, email):
        assert not is_valid_email(email)


class TestValidateUpdateProfileRequest:
    def test_valid_request(self):
        req = UpdateProfileRequest(name="John Doe", email="john@example.com", phone="1234567890")
        validate_update_profile_request(req)

    def test_valid_partial_update(self):
        validate_update_profile_request(UpdateProfileRequest(name="John Doe"))

    def test_empty_request(self):
        validate_update_profile_request(UpdateProfileRequest())

    def test_whitespace_name(self):
        with pytest.raises(ValidationError, match="name cannot be empty"):
            validate_update_profile_request(UpdateProfileRequest(name="   ", email="john@example.com"))

    def test_invalid_email(self):
        with pytest.raises(ValidationError, match="invalid email format"):
            validate_update_profile_request(UpdateProfileRequest(name="John Doe", email="invalid-email"))

    def test_whitespace_email(self):
        with pytest.raises(ValidationError, match="email cannot be empty"):
            validate_update_profile_request(UpdateProfileRequest(email="   "))

    def test_error_is_bad_request(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_update_profile_request(UpdateProfileRequest(email="nope"))
        assert exc_info.value.status_code == 400


class TestValidateChangePasswordRequest:
    def test_valid_password(self):
        validate_change_password_request(ChangePasswordRequest(new_password="secret"))

    def test_empty_password(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_change_password_request(ChangePasswordRequest(new_password="   "))

    def test_too_short(self):
        with pytest.raises(ValidationError, match="at least 6 characters"):
            validate_change_password_request(ChangePasswordRequest(new_password="12345"))

    def test_length_counts_after_trimming(self):
        with pytest.raises(ValidationError):
            validate_change_password_request(ChangePasswordRequest(new_password="  12345  "))

    def test_minimum_is_configurable(self):
        req = ChangePasswordRequest(new_password="123456")
        with pytest.raises(ValidationError, match="at least 8 characters"):
            validate_change_password_request(req, min_length=8)

    def test_length_counts_utf8_bytes(self):
        validate_change_password_request(ChangePasswordRequest(new_password="\u00e9\u00e9\u00e9"))
        with pytest.raises(ValidationError, match="at least 6"):
            validate_change_password_request(ChangePasswordRequest(new_password="\u00e9\u00e9"))

    def test_too_long_for_bcrypt(self):
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            validate_change_password_request(ChangePasswordRequest(new_password="x" * 73))


class TestValidateUpdatePreferencesRequest:
    @pytest.mark.parametrize("mode", ["light", "dark", "LIGHT", "Dark"])
    def test_accepts_display_modes(self, mode):
        validate_update_preferences_request(UpdatePreferencesRequest(display_mode=mode))

    def test_rejects_unknown_display_mode(self):
        with pytest.raises(ValidationError, match="displayMode must be 'light' or 'dark'"):
            validate_update_preferences_request(UpdatePreferencesRequest(display_mode="blue"))

    def test_absent_display_mode(self):
        validate_update_preferences_request(UpdatePreferencesRequest(language="fr"))

    def test_normalizes_to_lowercase(self):
        assert normalize_display_mode(" Dark ") == "dark"
