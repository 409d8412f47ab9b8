"""ORM model for admin accounts (auth, RBAC and the refresh-token session)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from admin_service.models.base import Base


class Admin(Base):
    """
    Admin account for JWT authentication and role-based access control.

    role: 'admin' or 'super-admin'
    refresh_token_hash: bcrypt hash of the one live refresh token; NULL when
    there is no active session (never logged in, or logged out).
    """

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="admin")
    refresh_token_hash = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
