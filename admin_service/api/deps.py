"""FastAPI dependency providers wiring services to the request-scoped DB session."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from admin_service.core.config import get_settings
from admin_service.core.database import get_db
from admin_service.core.security import CredentialHasher, TokenIssuer
from admin_service.services.accounts import AdminRepository
from admin_service.services.admins import AdminService
from admin_service.services.auth import Authenticator, TokenRefresher


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Process-wide issuer; signing secrets are read from settings once."""
    return TokenIssuer.from_settings(get_settings())


@lru_cache
def get_hasher() -> CredentialHasher:
    return CredentialHasher()


def get_admin_repository(db: Annotated[Session, Depends(get_db)]) -> AdminRepository:
    return AdminRepository(db)


def get_authenticator(
    repository: Annotated[AdminRepository, Depends(get_admin_repository)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    hasher: Annotated[CredentialHasher, Depends(get_hasher)],
) -> Authenticator:
    return Authenticator(repository, issuer, hasher)


def get_token_refresher(
    repository: Annotated[AdminRepository, Depends(get_admin_repository)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    hasher: Annotated[CredentialHasher, Depends(get_hasher)],
) -> TokenRefresher:
    return TokenRefresher(repository, repository, issuer, hasher)


def get_admin_service(
    repository: Annotated[AdminRepository, Depends(get_admin_repository)],
    hasher: Annotated[CredentialHasher, Depends(get_hasher)],
) -> AdminService:
    return AdminService(repository, hasher)
