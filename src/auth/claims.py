from __future__ import annotations

from pydantic import BaseModel

from src.auth.permissions import CUSTOMER_USER_MARKER, SUBCUSTOMER_MARKER
from src.domain.principals import PrincipalKind, PrincipalRecord


class SessionClaims(BaseModel):
    """Normalized identity and scope carried by a session token."""
    principal_id: str
    email: str
    display_name: str | None = None
    principal_kind: PrincipalKind
    effective_role: str
    organization_role: str | None = None
    organization_id: str | None = None
    organization_display_name: str | None = None
    organization_company_name: str | None = None
    organization_plan: str | None = None


def build_claims(principal: PrincipalRecord) -> SessionClaims:
    if principal.kind == PrincipalKind.STAFF:
        if principal.role is None:
            raise ValueError(f"Staff principal {principal.id} has no role")
        return SessionClaims(
            principal_id=principal.id,
            email=principal.email,
            display_name=principal.name,
            principal_kind=principal.kind,
            effective_role=principal.role.name,
        )

    organization = principal.organization
    if organization is None:
        raise ValueError(f"Principal {principal.id} has no resolved organization")

    if principal.kind == PrincipalKind.CUSTOMER_USER:
        return SessionClaims(
            principal_id=principal.id,
            email=principal.email,
            display_name=principal.name,
            principal_kind=principal.kind,
            effective_role=CUSTOMER_USER_MARKER,
            organization_role=principal.role.name if principal.role else None,
            organization_id=organization.id,
            organization_display_name=organization.name,
            organization_company_name=organization.company_name,
            organization_plan=organization.plan,
        )

    return SessionClaims(
        principal_id=principal.id,
        email=principal.email,
        display_name=principal.name,
        principal_kind=principal.kind,
        effective_role=SUBCUSTOMER_MARKER,
        organization_id=organization.id,
        organization_display_name=organization.name,
    )
