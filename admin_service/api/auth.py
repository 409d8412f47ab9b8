"""Auth routes: login, logout and refresh-token rotation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from admin_service.api.deps import get_authenticator, get_token_refresher
from admin_service.api.guards import (
    RefreshCredentials,
    get_current_identity,
    get_refresh_credentials,
)
from admin_service.core.roles import Identity
from admin_service.core.security import TokenPair
from admin_service.schemas.auth import (
    LoginRequest,
    LoginResponse,
    TokenPairResponse,
)
from admin_service.services.auth import Authenticator, TokenRefresher

router = APIRouter()


def token_pair_response(tokens: TokenPair) -> TokenPairResponse:
    return TokenPairResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns identity and a token pair.
    Wrong email and wrong password give the same 400 response.
    """
    result = authenticator.login(body.email, body.password)
    return LoginResponse(
        id=result.id,
        email=result.email,
        first_name=result.first_name,
        last_name=result.last_name,
        tokens=token_pair_response(result.tokens),
    )


@router.get("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    identity: Annotated[Identity, Depends(get_current_identity)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> Response:
    """Invalidate the caller's refresh token. The access token stays valid until it expires."""
    authenticator.logout(identity.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/refresh", response_model=TokenPairResponse)
def refresh(
    credentials: Annotated[RefreshCredentials, Depends(get_refresh_credentials)],
    refresher: Annotated[TokenRefresher, Depends(get_token_refresher)],
) -> TokenPairResponse:
    """
    Exchange the refresh token in the Authorization header for a new pair.
    Each refresh token works once; 403 on reuse, logout or mismatch.
    """
    tokens = refresher.refresh(credentials.admin_id, credentials.refresh_token)
    return token_pair_response(tokens)
