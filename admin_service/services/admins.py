"""Admin account CRUD on top of the repository (no session handling)."""

import logging

from admin_service.core.errors import DuplicateAccountError
from admin_service.core.roles import BASE_ROLE
from admin_service.core.security import CredentialHasher
from admin_service.models import Admin
from admin_service.schemas.admin import AdminCreate, AdminUpdate
from admin_service.services.accounts import AdminRepository

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, repository: AdminRepository, hasher: CredentialHasher) -> None:
        self.repository = repository
        self.hasher = hasher

    def create_admin(self, body: AdminCreate) -> Admin:
        """Create an admin with the base role and no active session."""
        if self.repository.get_by_email(body.email) is not None:
            raise DuplicateAccountError()
        admin = self.repository.create(
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            password_hash=self.hasher.hash(body.password),
            role=BASE_ROLE,
        )
        logger.info("Admin created", extra={"admin_id": admin.id})
        return admin

    def list_admins(self) -> list[Admin]:
        return self.repository.list_all()

    def get_admin(self, admin_id: int) -> Admin:
        return self.repository.get(admin_id)

    def update_admin(self, admin_id: int, body: AdminUpdate) -> Admin:
        """Apply the fields present in the body; a new password is re-hashed."""
        self.repository.get(admin_id)
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        password = changes.pop("password", None)
        if password is not None:
            changes["password_hash"] = self.hasher.hash(password)
        if "email" in changes:
            other = self.repository.get_by_email(changes["email"])
            if other is not None and other.id != admin_id:
                raise DuplicateAccountError()
        admin = self.repository.update(admin_id, changes)
        logger.info(
            "Admin updated",
            extra={"admin_id": admin_id, "fields": sorted(body.model_fields_set)},
        )
        return admin

    def delete_admin(self, admin_id: int) -> Admin:
        admin = self.repository.delete(admin_id)
        logger.info("Admin deleted", extra={"admin_id": admin_id})
        return admin
