"""Secret hashing and JWT issuance/verification for the two-token auth scheme."""

import base64
import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal

import bcrypt
import jwt

from admin_service.core.errors import HashingError, InvalidTokenError

if TYPE_CHECKING:
    from admin_service.core.config import Settings

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); fixed work factor for passwords and refresh-token hashes.
BCRYPT_ROUNDS = 10

TokenType = Literal["access", "refresh"]

REQUIRED_CLAIMS = ["sub", "role", "type", "exp", "iat"]


def _prepare_secret(secret: str) -> bytes:
    # bcrypt reads at most 72 bytes and a JWT is longer than that; hash first so
    # every byte of the secret counts. base64(sha256) is 44 bytes.
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return base64.b64encode(digest)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Hash of a fixed throwaway secret, computed once per work factor per process."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_prepare_secret("dummy-password-for-timing"), salt).decode("utf-8")


class CredentialHasher:
    """One-way salted bcrypt hashing of passwords and refresh tokens."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        # Warm the dummy hash now so no login request pays for hashpw.
        _dummy_hash(rounds)

    def hash(self, secret: str) -> str:
        """Hash a secret for storage. Raises HashingError if bcrypt fails."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(_prepare_secret(secret), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            logger.exception("bcrypt hashing failed")
            raise HashingError() from e

    def verify(self, secret: str, hashed: str) -> bool:
        """Verify a secret against a stored hash; malformed hashes do not match."""
        try:
            return bcrypt.checkpw(_prepare_secret(secret), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

    def verify_dummy(self, secret: str) -> bool:
        """
        Run one bcrypt check against a throwaway hash and return False.

        Costs the same as verify() so a lookup miss is not faster than a wrong password.
        """
        self.verify(secret, _dummy_hash(self.rounds))
        return False


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims of an access or refresh token."""

    subject: str
    role: str
    token_type: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """
    Signs and verifies access and refresh JWTs.

    Each family has its own signing secret, so a leaked access key cannot mint
    refresh tokens and vice versa. Secrets are injected once and never change.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        *,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=30),
        refresh_ttl: timedelta = timedelta(days=7),
        leeway: timedelta = timedelta(seconds=5),
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("Both signing secrets must be non-empty")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh signing secrets must differ")
        self._secrets: dict[str, str] = {
            "access": access_secret,
            "refresh": refresh_secret,
        }
        self._ttls: dict[str, timedelta] = {
            "access": access_ttl,
            "refresh": refresh_ttl,
        }
        self.algorithm = algorithm
        self.leeway = leeway

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenIssuer":
        return cls(
            settings.JWT_ACCESS_SECRET.get_secret_value(),
            settings.JWT_REFRESH_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
            leeway=timedelta(seconds=settings.JWT_LEEWAY_SECONDS),
        )

    def _sign(self, sub: str | int, role: str, token_type: TokenType, now: datetime) -> str:
        payload: dict[str, Any] = {
            "sub": str(sub),
            "role": role,
            "type": token_type,
            "iat": now,
            "exp": now + self._ttls[token_type],
            # Unique per token so two pairs issued in the same second still differ.
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self._secrets[token_type], algorithm=self.algorithm)

    def issue(self, subject_id: str | int, role: str) -> TokenPair:
        """Create a fresh access/refresh pair for the subject."""
        now = datetime.now(UTC)
        return TokenPair(
            access_token=self._sign(subject_id, role, "access", now),
            refresh_token=self._sign(subject_id, role, "refresh", now),
        )

    def _verify(self, token: str, token_type: TokenType) -> TokenPayload:
        if not token:
            raise InvalidTokenError()
        try:
            claims = jwt.decode(
                token,
                self._secrets[token_type],
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        if claims.get("type") != token_type:
            raise InvalidTokenError()
        sub = claims.get("sub")
        role = claims.get("role")
        if not isinstance(sub, str) or not sub or not isinstance(role, str) or not role:
            raise InvalidTokenError("Invalid token payload")
        return TokenPayload(
            subject=sub,
            role=role,
            token_type=token_type,
            issued_at=datetime.fromtimestamp(claims["iat"], UTC),
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )

    def verify_access(self, token: str) -> TokenPayload:
        """Check signature and expiry against the access secret."""
        return self._verify(token, "access")

    def verify_refresh(self, token: str) -> TokenPayload:
        """Check signature and expiry against the refresh secret."""
        return self._verify(token, "refresh")
