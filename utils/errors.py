"""
Service error taxonomy.

Every error carries the HTTP status code it maps to; ``api.errors`` renders
them as ``{"error": "<message>"}`` bodies.
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for errors that surface as an HTTP status code."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthenticationError(ServiceError):
    status_code = 401


class AuthorizationError(ServiceError):
    status_code = 403


class ValidationError(ServiceError):
    status_code = 400


class StoreError(ServiceError):
    status_code = 500


class KeyNotFoundError(StoreError):
    """The key is absent from its bucket."""

    status_code = 404

    def __init__(self, key: str) -> None:
        super().__init__(f"key not found: {key}")
        self.key = key


class MarshalError(StoreError):
    status_code = 500
