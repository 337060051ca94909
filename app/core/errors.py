"""Application error taxonomy. Each error carries the HTTP status it maps to."""


class AppError(Exception):
    """Base class for errors that the API renders into the response envelope."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Bad input shape or constraint."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(AppError):
    """Missing, invalid or expired credentials, or insufficient rights."""

    status_code = 401
    default_message = "Unauthorized"


class MissingTokenError(AuthError):
    default_message = "Missing authorization token"


class InvalidTokenError(AuthError):
    default_message = "Invalid or expired token"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Duplicate unique key."""

    status_code = 409
    default_message = "Already exists"


class PasswordHashError(AppError):
    default_message = "There was an error while hashing password"


class TokenError(AppError):
    default_message = "Failed to generate token"
