"""
NoteHub Errors.

Every error a service or dependency raises on purpose derives from
``ApplicationError``. Each class carries its HTTP status and error code,
so the exception handlers need no lookup table.

The generic classes (``NotFoundError``, ``ValidationError`` ...) are
used with an explicit message. The domain classes below them carry the
message callers see for a specific rule, such as a second report of the
same note.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    code: str = "SYS_INTERNAL_ERROR"
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """A required field is missing or blank, or a value is out of bounds."""

    status_code = 400
    code = "VAL_VALIDATION_ERROR"
    default_message = "Validation failed"


class AuthenticationError(ApplicationError):
    """No usable bearer token, or bad credentials."""

    status_code = 401
    code = "AUTH_UNAUTHORIZED"
    default_message = "Authentication required"


class AuthorizationError(ApplicationError):
    """Authenticated, but not allowed to do this."""

    status_code = 403
    code = "AUTHZ_FORBIDDEN"
    default_message = "Permission denied"


class NotFoundError(ApplicationError):
    status_code = 404
    code = "RES_NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(ApplicationError):
    status_code = 409
    code = "RES_CONFLICT"
    default_message = "Resource conflict"


class DatabaseError(ApplicationError):
    status_code = 500
    code = "SYS_DATABASE_ERROR"
    default_message = "Database error"


# Notes


class NoteNotFoundError(NotFoundError):
    default_message = "Note not found"


class NotNoteOwnerError(AuthorizationError):
    """Only the uploader may delete a note through the owner routes."""

    default_message = "Forbidden: You can only delete your own notes"


class AlreadyReportedError(ValidationError):
    """A user reports a given note at most once."""

    default_message = "You have already reported this note"


# Users and accounts


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class NotProfileOwnerError(AuthorizationError):
    """Saved notes can only be changed by their owner."""

    default_message = "Forbidden"


class EmailTakenError(ConflictError):
    default_message = "Email already registered"


class InvalidCredentialsError(AuthenticationError):
    """Unknown email and wrong password are reported the same way."""

    default_message = "Invalid credentials"


class AccountBlockedError(AuthorizationError):
    """Raised only while features.auth_block_enforced is on."""

    default_message = "Account is blocked"


class AdminRequiredError(AuthorizationError):
    default_message = "Admin access required"
