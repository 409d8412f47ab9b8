"""Per-request auth dependencies: access guard, refresh guard and role guard."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from admin_service.api.deps import get_token_issuer
from admin_service.core.errors import AccessDeniedError, InvalidTokenError
from admin_service.core.roles import Identity, authorize, required_roles
from admin_service.core.security import TokenIssuer, TokenPayload

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _subject_id(payload: TokenPayload) -> int:
    try:
        return int(payload.subject)
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Invalid token payload") from e


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> Identity:
    """
    Access guard: require a valid Bearer access token.

    Attaches the identity to request.state.identity for the role guard. Never
    touches the database or the session. Raises 401 if missing or invalid.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = issuer.verify_access(credentials.credentials)
        admin_id = _subject_id(payload)
    except InvalidTokenError as e:
        raise _unauthorized(e.message) from e
    identity = Identity(id=admin_id, role=payload.role)
    request.state.identity = identity
    return identity


@dataclass(frozen=True)
class RefreshCredentials:
    admin_id: int
    refresh_token: str


def get_refresh_credentials(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> RefreshCredentials:
    """Refresh guard: require a Bearer refresh token with a valid signature. Raises 403."""
    if credentials is None:
        raise AccessDeniedError()
    try:
        payload = issuer.verify_refresh(credentials.credentials)
        admin_id = _subject_id(payload)
    except InvalidTokenError as e:
        raise AccessDeniedError() from e
    return RefreshCredentials(admin_id=admin_id, refresh_token=credentials.credentials)


class RoleGuard:
    """
    Role guard for one route key, looked up in the declarative ROUTE_ROLES table.

    Precondition: get_current_identity must come before this guard in the
    route's dependencies. Without an attached identity a route that declares
    roles is denied.
    """

    def __init__(self, route_key: str) -> None:
        self.route_key = route_key
        self.required = required_roles(route_key)

    def __call__(self, request: Request) -> None:
        identity = getattr(request.state, "identity", None)
        if not authorize(identity, self.required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
