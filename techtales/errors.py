"""
Error taxonomy for the session store, comment subsystem and data access layer.
"""

from typing import Optional


class TechTalesError(Exception):
    """Base class for all application errors."""


class AuthError(TechTalesError):
    """Identity operation failed. Surfaced as a notification and re-raised."""


class InvalidCredentials(AuthError):
    """Email/password pair not present in the credential set."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class DuplicateEmail(AuthError):
    """Signup attempted with an email that is already known."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists")


class AuthCancelled(AuthError):
    """External authorization window was blocked or closed before completion."""

    def __init__(self, provider: str, reason: str = "popup closed"):
        self.provider = provider
        self.reason = reason
        super().__init__(f"Authentication cancelled: {provider} {reason}")


class Unauthenticated(TechTalesError):
    """A comment action was attempted without a session."""

    def __init__(self, message: str = "You must be logged in to comment"):
        super().__init__(message)


class DataAccessFailure(TechTalesError):
    """Opaque failure from the data access layer."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Data access failed during {operation}{detail}")


class CommentValidationError(ValueError):
    """Comment content failed form validation."""

    def __init__(self, message: str, field: str = "content", error_type: str = "value_error"):
        self.field = field
        self.error_type = error_type
        super().__init__(message)
