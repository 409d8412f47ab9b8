"""Pydantic request/response schemas."""

from admin_service.schemas.admin import AdminCreate, AdminSummary, AdminUpdate
from admin_service.schemas.auth import (
    LoginRequest,
    LoginResponse,
    TokenPairResponse,
)
from admin_service.schemas.health import HealthResponse

__all__ = [
    "AdminCreate",
    "AdminSummary",
    "AdminUpdate",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "TokenPairResponse",
]
