"""Admin account routes: registration and CRUD."""

from typing import Annotated

from fastapi import APIRouter, Depends

from admin_service.api.auth import token_pair_response
from admin_service.api.deps import get_admin_service, get_authenticator
from admin_service.api.guards import RoleGuard, get_current_identity
from admin_service.core.roles import ROUTE_LIST_ADMINS
from admin_service.schemas.admin import AdminCreate, AdminSummary, AdminUpdate
from admin_service.schemas.auth import TokenPairResponse
from admin_service.services.admins import AdminService
from admin_service.services.auth import Authenticator

router = APIRouter()


@router.post("/register", response_model=TokenPairResponse)
def register(
    body: AdminCreate,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> TokenPairResponse:
    """Register a new admin (base role) and return its first token pair. 400 if the email exists."""
    tokens = authenticator.register(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=body.password,
    )
    return token_pair_response(tokens)


@router.get(
    "/all-admins",
    response_model=list[AdminSummary],
    dependencies=[Depends(get_current_identity), Depends(RoleGuard(ROUTE_LIST_ADMINS))],
)
def list_admins(
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> list[AdminSummary]:
    """List all admins (super-admin only)."""
    return [AdminSummary.model_validate(a) for a in service.list_admins()]


@router.post(
    "/create-admin",
    response_model=AdminSummary,
    dependencies=[Depends(get_current_identity)],
)
def create_admin(
    body: AdminCreate,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> AdminSummary:
    """Create an admin without logging it in."""
    return AdminSummary.model_validate(service.create_admin(body))


@router.get(
    "/{admin_id}",
    response_model=AdminSummary,
    dependencies=[Depends(get_current_identity)],
)
def get_admin(
    admin_id: int,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> AdminSummary:
    return AdminSummary.model_validate(service.get_admin(admin_id))


@router.patch(
    "/{admin_id}",
    response_model=AdminSummary,
    dependencies=[Depends(get_current_identity)],
)
def update_admin(
    admin_id: int,
    body: AdminUpdate,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> AdminSummary:
    return AdminSummary.model_validate(service.update_admin(admin_id, body))


@router.delete(
    "/{admin_id}",
    response_model=AdminSummary,
    dependencies=[Depends(get_current_identity)],
)
def delete_admin(
    admin_id: int,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> AdminSummary:
    return AdminSummary.model_validate(service.delete_admin(admin_id))
