"""Exception taxonomy for the authentication core and the account repository."""


class AuthServiceError(Exception):
    """Base class; message is safe to show to API clients."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentialsError(AuthServiceError):
    """Login failed. Never says whether the email or the password was wrong."""

    default_message = "Invalid credentials"


class DuplicateAccountError(AuthServiceError):
    """An account with this email already exists."""

    default_message = "Admin already exists"


class AccessDeniedError(AuthServiceError):
    """Refresh rejected: no session, token mismatch, or lost rotation race."""

    default_message = "Access Denied"


class InvalidTokenError(AuthServiceError):
    """Bearer token missing, malformed, expired, or signed with the wrong key."""

    default_message = "Invalid or expired token"


class NotFoundError(AuthServiceError):
    """Entity lookup by id failed."""

    default_message = "Admin not found"


class HashingError(AuthServiceError):
    """The bcrypt primitive failed internally."""

    default_message = "Internal server error"
