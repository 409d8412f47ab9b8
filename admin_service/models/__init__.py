"""SQLAlchemy ORM models."""

from admin_service.models.admin import Admin
from admin_service.models.base import Base

__all__ = ["Admin", "Base"]
