"""Translate domain exceptions into HTTP responses without leaking internals."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from admin_service.core.errors import (
    AccessDeniedError,
    AuthServiceError,
    DuplicateAccountError,
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
STATUS_BY_ERROR: tuple[tuple[type[AuthServiceError], int], ...] = (
    (InvalidCredentialsError, status.HTTP_400_BAD_REQUEST),
    (DuplicateAccountError, status.HTTP_400_BAD_REQUEST),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (InvalidTokenError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (HashingError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: AuthServiceError) -> int:
    for error_cls, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handler that maps the auth error taxonomy to status codes."""

    @app.exception_handler(AuthServiceError)
    async def handle_auth_service_error(request: Request, exc: AuthServiceError) -> JSONResponse:
        status_code = status_for(exc)
        headers = None
        if status_code >= 500:
            logger.error(
                "Request failed",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(exc).__name__,
                },
            )
            message = "Internal server error"
        else:
            message = exc.message
            if status_code == status.HTTP_401_UNAUTHORIZED:
                headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=status_code,
            content={"detail": message},
            headers=headers,
        )
