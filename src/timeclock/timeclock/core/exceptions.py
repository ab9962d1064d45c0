from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCredentialsInput(ValidationError):
    """Raised when email or password is missing, before any network call."""


class AuthenticationError(DomainError):
    """Raised when the employee cannot be (or is no longer) authenticated."""


class AuthFailed(AuthenticationError):
    """Raised when the backend rejects a login."""

    def __init__(self, message: str, *, server_message: Optional[str] = None):
        super().__init__(message)
        self.server_message = server_message


class InvalidToken(AuthenticationError):
    """Raised when a bearer token does not decode to a valid identity."""


class Unauthorized(AuthenticationError):
    """Raised when an authenticated call is rejected (expired or revoked token)."""

    def __init__(self, message: str = "Unauthorized", *, server_message: Optional[str] = None):
        super().__init__(message)
        self.server_message = server_message


class NotAuthenticated(AuthenticationError):
    """Raised when an authenticated operation is attempted without a credential."""


class CaptureUnavailable(DomainError):
    """Raised when no camera stream is attached or a frame cannot be read."""


class UploadFailed(DomainError):
    """Raised when the image host does not return a usable URL."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class Conflict(DomainError):
    """Raised when the backend rejects an event (duplicate or out of order)."""

    def __init__(self, message: str, *, server_message: Optional[str] = None):
        super().__init__(message)
        self.server_message = server_message


class NetworkError(DomainError):
    """Raised on transport failures and server-side errors."""

    def __init__(self, message: str, *, server_message: Optional[str] = None):
        super().__init__(message)
        self.server_message = server_message


class ActionInProgress(DomainError):
    """Raised when a new action is triggered while another one is running."""
