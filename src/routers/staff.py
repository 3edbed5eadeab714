from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from src.auth import RequestContext, require_staff_session
from src.db import supabase
from src.domain.errors import ServiceError, service_error_detail, service_error_http_status
from src.domain.principals import PrincipalKind
from src.models.auth import SessionResponse
from src.models.organizations import (
    OrganizationProvision,
    OrganizationResponse,
    OrganizationUpdate,
    PrincipalStatusResponse,
    ProvisionResponse,
    StatusUpdate,
)
from src.observability import auth_counters
from src.services import organizations as organization_service
from src.services.provisioning import provision_organization

router = APIRouter(prefix="/api/staff", tags=["staff"])


def _http_error(exc: ServiceError) -> HTTPException:
    return HTTPException(
        status_code=service_error_http_status(exc),
        detail=service_error_detail(exc),
    )


@router.get("/session", response_model=SessionResponse)
async def get_staff_session(auth: RequestContext = Depends(require_staff_session)):
    """Current staff identity as seen by the route guard."""
    return SessionResponse(**asdict(auth))


@router.get("/organizations", response_model=list[OrganizationResponse])
async def list_organizations(auth: RequestContext = Depends(require_staff_session)):
    """List non-deleted organizations."""
    return await run_in_threadpool(organization_service.list_organizations, supabase)


@router.post(
    "/organizations",
    response_model=ProvisionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    data: OrganizationProvision,
    auth: RequestContext = Depends(require_staff_session),
):
    """Provision an organization and its Owner user in one transaction."""
    try:
        return await run_in_threadpool(provision_organization, supabase, data, auth)
    except ServiceError as exc:
        raise _http_error(exc)


@router.get("/organizations/{org_id}", response_model=OrganizationResponse)
async def get_organization(org_id: str, auth: RequestContext = Depends(require_staff_session)):
    try:
        return await run_in_threadpool(organization_service.get_organization, supabase, org_id)
    except ServiceError as exc:
        raise _http_error(exc)


@router.patch("/organizations/{org_id}", response_model=OrganizationResponse)
async def update_organization(
    org_id: str,
    data: OrganizationUpdate,
    auth: RequestContext = Depends(require_staff_session),
):
    """Edit an organization's name, company name or plan."""
    try:
        return await run_in_threadpool(
            organization_service.update_organization,
            supabase,
            org_id,
            data.model_dump(exclude_none=True),
            auth,
        )
    except ServiceError as exc:
        raise _http_error(exc)


@router.patch("/organizations/{org_id}/status", response_model=OrganizationResponse)
async def update_organization_status(
    org_id: str,
    data: StatusUpdate,
    auth: RequestContext = Depends(require_staff_session),
):
    """Activate, deactivate, suspend or park an organization."""
    try:
        return await run_in_threadpool(
            organization_service.update_organization_status, supabase, org_id, data.status, auth
        )
    except ServiceError as exc:
        raise _http_error(exc)


@router.delete("/organizations/{org_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization(org_id: str, auth: RequestContext = Depends(require_staff_session)):
    """Soft delete an organization."""
    try:
        await run_in_threadpool(organization_service.soft_delete_organization, supabase, org_id, auth)
    except ServiceError as exc:
        raise _http_error(exc)
    return None


@router.patch(
    "/principals/{principal_kind}/{principal_id}/status",
    response_model=PrincipalStatusResponse,
)
async def update_principal_status(
    principal_kind: PrincipalKind,
    principal_id: str,
    data: StatusUpdate,
    auth: RequestContext = Depends(require_staff_session),
):
    """Change the status of a staff user, customer user or sub-customer."""
    try:
        return await run_in_threadpool(
            organization_service.update_principal_status,
            supabase,
            principal_kind,
            principal_id,
            data.status,
            auth,
        )
    except ServiceError as exc:
        raise _http_error(exc)


@router.get("/metrics")
async def get_metrics(auth: RequestContext = Depends(require_staff_session)):
    """In-process auth counters."""
    return {"counters": auth_counters.snapshot()}
