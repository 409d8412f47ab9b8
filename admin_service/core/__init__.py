"""Core app configuration, database, errors and security primitives."""

from admin_service.core.config import get_settings, settings
from admin_service.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
