"""Admin account repository: CRUD storage plus the per-account refresh-token session."""

import logging
from typing import Any, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from admin_service.core.errors import DuplicateAccountError, NotFoundError
from admin_service.models import Admin

logger = logging.getLogger(__name__)

# Columns PATCH /admin/{id} may change. Role and session are never client-editable.
UPDATABLE_FIELDS = ("first_name", "last_name", "email", "password_hash")


class AccountLookup(Protocol):
    """Read-only account access needed by the authenticator."""

    def get_by_email(self, email: str) -> Admin | None: ...

    def get_by_id(self, admin_id: int) -> Admin | None: ...


class SessionStore(Protocol):
    """Per-account storage of the hashed refresh token (None = no session)."""

    def load_refresh_hash(self, admin_id: int) -> str | None: ...

    def save_refresh_hash(self, admin_id: int, refresh_hash: str | None) -> None: ...

    def replace_refresh_hash(self, admin_id: int, expected: str, new: str) -> bool: ...


class AccountStore(AccountLookup, SessionStore, Protocol):
    """Everything the authenticator and refresher need from storage."""

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: str,
    ) -> Admin: ...

    def delete(self, admin_id: int) -> Admin: ...


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AdminRepository:
    """SQLAlchemy-backed AccountStore. One instance per request session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_email(self, email: str) -> Admin | None:
        return (
            self.db.query(Admin)
            .filter(Admin.email == normalize_email(email))
            .first()
        )

    def get_by_id(self, admin_id: int) -> Admin | None:
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def get(self, admin_id: int) -> Admin:
        """Return the admin or raise NotFoundError."""
        admin = self.get_by_id(admin_id)
        if admin is None:
            raise NotFoundError()
        return admin

    def list_all(self) -> list[Admin]:
        return self.db.query(Admin).order_by(Admin.id).all()

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: str,
    ) -> Admin:
        """Insert an admin. Raises DuplicateAccountError if the email is taken."""
        admin = Admin(
            first_name=first_name,
            last_name=last_name,
            email=normalize_email(email),
            password_hash=password_hash,
            role=role,
            refresh_token_hash=None,
        )
        self.db.add(admin)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateAccountError() from e
        self.db.refresh(admin)
        return admin

    def update(self, admin_id: int, changes: dict[str, Any]) -> Admin:
        """Apply allowed column changes. Raises NotFoundError or DuplicateAccountError."""
        admin = self.get(admin_id)
        for field, value in changes.items():
            if field not in UPDATABLE_FIELDS:
                raise ValueError(f"Field {field!r} cannot be updated")
            if field == "email":
                value = normalize_email(value)
            setattr(admin, field, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateAccountError() from e
        self.db.refresh(admin)
        return admin

    def delete(self, admin_id: int) -> Admin:
        """Delete and return the admin. Raises NotFoundError."""
        admin = self.get(admin_id)
        self.db.delete(admin)
        self.db.commit()
        return admin

    def load_refresh_hash(self, admin_id: int) -> str | None:
        row = (
            self.db.query(Admin.refresh_token_hash)
            .filter(Admin.id == admin_id)
            .first()
        )
        if row is None:
            raise NotFoundError()
        return row.refresh_token_hash

    def save_refresh_hash(self, admin_id: int, refresh_hash: str | None) -> None:
        """Overwrite the session hash; None ends the session."""
        updated = (
            self.db.query(Admin)
            .filter(Admin.id == admin_id)
            .update({Admin.refresh_token_hash: refresh_hash}, synchronize_session=False)
        )
        self.db.commit()
        if updated == 0:
            raise NotFoundError()

    def replace_refresh_hash(self, admin_id: int, expected: str, new: str) -> bool:
        """
        Compare-and-set the session hash.

        Swaps to `new` only if the stored hash still equals `expected`. Returns
        False when another rotation or a logout got there first.
        """
        updated = (
            self.db.query(Admin)
            .filter(Admin.id == admin_id, Admin.refresh_token_hash == expected)
            .update({Admin.refresh_token_hash: new}, synchronize_session=False)
        )
        self.db.commit()
        if updated != 1:
            logger.info(
                "Refresh-token swap lost a race",
                extra={"admin_id": admin_id},
            )
            return False
        return True
