"""Login, logout, registration and refresh-token rotation."""

import logging
from dataclasses import dataclass

from admin_service.core.errors import (
    AccessDeniedError,
    DuplicateAccountError,
    HashingError,
    InvalidCredentialsError,
    NotFoundError,
)
from admin_service.core.roles import BASE_ROLE
from admin_service.core.security import CredentialHasher, TokenIssuer, TokenPair
from admin_service.services.accounts import AccountStore, SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    id: int
    email: str
    first_name: str
    last_name: str
    tokens: TokenPair


class Authenticator:
    """
    Verifies credentials and manages the single refresh-token session per account.

    Depends only on the AccountStore protocol, so the account CRUD layer can
    use the authenticator without the two importing each other.
    """

    def __init__(
        self,
        accounts: AccountStore,
        issuer: TokenIssuer,
        hasher: CredentialHasher,
    ) -> None:
        self.accounts = accounts
        self.issuer = issuer
        self.hasher = hasher

    def start_session(self, admin_id: int, role: str) -> TokenPair:
        """Issue a token pair and store its refresh hash, replacing any previous session."""
        tokens = self.issuer.issue(admin_id, role)
        self.accounts.save_refresh_hash(admin_id, self.hasher.hash(tokens.refresh_token))
        return tokens

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate by email and password.

        Raises InvalidCredentialsError for an unknown email and for a wrong
        password alike.
        """
        admin = self.accounts.get_by_email(email)
        if admin is None:
            # Pay for one bcrypt check anyway so response time does not reveal
            # whether the account exists.
            self.hasher.verify_dummy(password)
            logger.info("Login rejected", extra={"reason": "unknown_account"})
            raise InvalidCredentialsError()
        if not self.hasher.verify(password, admin.password_hash):
            logger.info(
                "Login rejected",
                extra={"reason": "bad_password", "admin_id": admin.id},
            )
            raise InvalidCredentialsError()

        tokens = self.start_session(admin.id, admin.role)
        logger.info("Login succeeded", extra={"admin_id": admin.id})
        return LoginResult(
            id=admin.id,
            email=admin.email,
            first_name=admin.first_name,
            last_name=admin.last_name,
            tokens=tokens,
        )

    def logout(self, admin_id: int) -> None:
        """End the session. Idempotent; an account deleted meanwhile is ignored."""
        try:
            self.accounts.save_refresh_hash(admin_id, None)
        except NotFoundError:
            logger.info("Logout for missing account", extra={"admin_id": admin_id})
            return
        logger.info("Logged out", extra={"admin_id": admin_id})

    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> TokenPair:
        """
        Create an account with the base role and log it in.

        Raises DuplicateAccountError if the email is already registered. If the
        session cannot be started the new account is removed again, so a retry
        with the same email is not blocked.
        """
        if self.accounts.get_by_email(email) is not None:
            logger.info("Registration rejected", extra={"reason": "duplicate_email"})
            raise DuplicateAccountError()
        admin = self.accounts.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=self.hasher.hash(password),
            role=BASE_ROLE,
        )
        try:
            tokens = self.start_session(admin.id, admin.role)
        except HashingError:
            logger.warning("Registration rolled back", extra={"admin_id": admin.id})
            self.accounts.delete(admin.id)
            raise
        logger.info("Admin registered", extra={"admin_id": admin.id})
        return tokens


class TokenRefresher:
    """Rotate-on-use refresh: each refresh token can be exchanged exactly once."""

    def __init__(
        self,
        sessions: SessionStore,
        accounts: AccountStore,
        issuer: TokenIssuer,
        hasher: CredentialHasher,
    ) -> None:
        self.sessions = sessions
        self.accounts = accounts
        self.issuer = issuer
        self.hasher = hasher

    def refresh(self, admin_id: int, presented_refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair.

        Every rejection raises the same AccessDeniedError: no session, hash
        mismatch, or a concurrent rotation that swapped the hash first.
        """
        try:
            stored = self.sessions.load_refresh_hash(admin_id)
        except NotFoundError:
            stored = None
        if stored is None:
            logger.info("Refresh denied", extra={"reason": "no_session", "admin_id": admin_id})
            raise AccessDeniedError()
        if not self.hasher.verify(presented_refresh_token, stored):
            logger.info("Refresh denied", extra={"reason": "mismatch", "admin_id": admin_id})
            raise AccessDeniedError()

        # Role comes from the account, not the old token, so role changes apply.
        admin = self.accounts.get_by_id(admin_id)
        if admin is None:
            raise AccessDeniedError()
        tokens = self.issuer.issue(admin.id, admin.role)
        new_hash = self.hasher.hash(tokens.refresh_token)
        if not self.sessions.replace_refresh_hash(admin_id, stored, new_hash):
            logger.info("Refresh denied", extra={"reason": "rotated", "admin_id": admin_id})
            raise AccessDeniedError()
        logger.info("Tokens refreshed", extra={"admin_id": admin_id})
        return tokens
