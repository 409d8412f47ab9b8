"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class TokenPairResponse(CamelModel):
    """Access and refresh JWTs. Send as: Authorization: Bearer <token>"""

    access_token: str = Field(..., description="JWT access token (30 minutes)")
    refresh_token: str = Field(..., description="JWT refresh token (7 days, single use)")


class LoginResponse(CamelModel):
    """Identity summary plus a fresh token pair."""

    id: int
    email: str
    first_name: str
    last_name: str
    tokens: TokenPairResponse

