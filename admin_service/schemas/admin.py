"""Request/response schemas for admin account endpoints."""

from pydantic import Field, field_validator

from admin_service.schemas.auth import CamelModel


def _normalize_email(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip().lower()
    if not v:
        raise ValueError("email must be non-empty")
    return v


class AdminCreate(CamelModel):
    """Body for POST /admin/register and POST /admin/create-admin."""

    first_name: str = Field(..., min_length=1, max_length=255, examples=["John"])
    last_name: str = Field(..., min_length=1, max_length=255, examples=["Doe"])
    email: str = Field(..., min_length=1, max_length=255, examples=["johndoe@example.com"])
    password: str = Field(..., min_length=1, max_length=128, examples=["12345678"])

    _email = field_validator("email")(_normalize_email)


class AdminUpdate(CamelModel):
    """Body for PATCH /admin/{id}; omitted fields are left unchanged."""

    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=128)

    _email = field_validator("email")(_normalize_email)


class AdminSummary(CamelModel):
    """Admin entry returned by the API (no password or session hashes)."""

    id: int
    first_name: str
    last_name: str
    email: str
    role: str
