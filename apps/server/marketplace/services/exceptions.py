"""Service-layer errors mapped to HTTP responses at the request boundary."""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for errors with a user-facing message and HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ServiceError):
    """Raised when the caller has no session or lacks the admin role."""

    status_code = 401
    default_message = "Unauthorized"


class ValidationFailed(ServiceError):
    """Raised when request input is missing or malformed."""

    status_code = 400
    default_message = "Validation error"


class SelfTargetRejected(ServiceError):
    """Raised when an admin targets their own account."""

    status_code = 400
    default_message = "Cannot suspend your own account"


class PrivilegedTargetRejected(ServiceError):
    """Raised when a moderation action targets an admin account."""

    status_code = 400
    default_message = "Cannot suspend admin accounts"


class InvalidStateRejected(ServiceError):
    """Raised when the target is not in a state the action applies to."""

    status_code = 400
    default_message = "Invalid account state"


class NotFound(ServiceError):
    status_code = 404
    default_message = "User not found"


class PersistenceFailure(ServiceError):
    """Raised at the request boundary when the store fails unexpectedly.

    The message is generic; the underlying error is logged, never returned.
    """

    status_code = 500
    default_message = "Internal server error"


class InvalidCredentialsError(ServiceError):
    status_code = 401
    default_message = "Invalid email or password"


class AccountDeactivatedError(ServiceError):
    status_code = 403
    default_message = "Account is deactivated"


class AccountSuspendedError(ServiceError):
    status_code = 403
    default_message = "Account is suspended"


class UserEmailAlreadyExistsError(ServiceError):
    """Raised when attempting to create a user with an email that already exists."""

    status_code = 409

    def __init__(self, email: str) -> None:
        super().__init__(f"A user with email '{email}' already exists")
        self.email = email


__all__ = [
    "AccountDeactivatedError",
    "AccountSuspendedError",
    "InvalidCredentialsError",
    "InvalidStateRejected",
    "NotFound",
    "PersistenceFailure",
    "PrivilegedTargetRejected",
    "SelfTargetRejected",
    "ServiceError",
    "Unauthorized",
    "UserEmailAlreadyExistsError",
    "ValidationFailed",
]
