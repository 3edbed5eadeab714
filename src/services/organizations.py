from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from src.auth.context import RequestContext
from src.auth.permissions import can_mutate_organizations
from src.domain.errors import ForbiddenError, NotFoundError
from src.domain.principals import AccountStatus, PrincipalKind
from src.observability import log_event
from src.store.principals import PRINCIPAL_TABLES

ORGANIZATION_COLUMNS = "id, name, company_name, plan, status, created_at, updated_at"


def ensure_can_mutate_organizations(actor: RequestContext) -> None:
    """Organization and principal records are only writable by staff roles."""
    if actor.principal_kind != PrincipalKind.STAFF or not can_mutate_organizations(actor.effective_role):
        raise ForbiddenError("Administrator or Support Agent role required")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def list_organizations(client: Any) -> list[dict]:
    result = client.table("organizations").select(ORGANIZATION_COLUMNS).is_(
        "deleted_at", "null"
    ).execute()
    return result.data


def get_organization(client: Any, org_id: str) -> dict:
    result = client.table("organizations").select(ORGANIZATION_COLUMNS).eq(
        "id", org_id
    ).is_("deleted_at", "null").execute()
    if not result.data:
        raise NotFoundError("Organization not found")
    return result.data[0]


def update_organization(
    client: Any,
    org_id: str,
    changes: dict,
    actor: RequestContext,
) -> dict:
    """Apply name/company_name/plan changes to a non-deleted organization."""
    ensure_can_mutate_organizations(actor)
    result = client.table("organizations").update({
        **changes,
        "updated_at": _now(),
    }).eq("id", org_id).is_("deleted_at", "null").execute()
    if not result.data:
        raise NotFoundError("Organization not found")

    log_event(
        "organization_updated",
        org_id=org_id,
        fields=sorted(changes),
        actor_id=actor.principal_id,
    )
    return result.data[0]


def update_organization_status(
    client: Any,
    org_id: str,
    status: AccountStatus,
    actor: RequestContext,
) -> dict:
    """Change an organization's status.

    Sessions already issued to its users keep working until they expire,
    unless the session status re-check is enabled.
    """
    ensure_can_mutate_organizations(actor)
    result = client.table("organizations").update({
        "status": AccountStatus(status).value,
        "updated_at": _now(),
    }).eq("id", org_id).is_("deleted_at", "null").execute()
    if not result.data:
        raise NotFoundError("Organization not found")

    log_event(
        "organization_status_changed",
        org_id=org_id,
        status=AccountStatus(status).value,
        actor_id=actor.principal_id,
    )
    return result.data[0]


def soft_delete_organization(client: Any, org_id: str, actor: RequestContext) -> None:
    ensure_can_mutate_organizations(actor)
    now = _now()
    result = client.table("organizations").update({
        "deleted_at": now,
        "updated_at": now,
    }).eq("id", org_id).is_("deleted_at", "null").execute()
    if not result.data:
        raise NotFoundError("Organization not found")

    log_event("organization_deleted", org_id=org_id, actor_id=actor.principal_id)


def update_principal_status(
    client: Any,
    kind: PrincipalKind,
    principal_id: str,
    status: AccountStatus,
    actor: RequestContext,
) -> dict:
    ensure_can_mutate_organizations(actor)
    kind = PrincipalKind(kind)
    result = client.table(PRINCIPAL_TABLES[kind]).update({
        "status": AccountStatus(status).value,
        "updated_at": _now(),
    }).eq("id", principal_id).is_("deleted_at", "null").execute()
    if not result.data:
        raise NotFoundError("Principal not found")

    row = result.data[0]
    log_event(
        "principal_status_changed",
        principal_kind=kind.value,
        principal_id=principal_id,
        status=AccountStatus(status).value,
        actor_id=actor.principal_id,
    )
    return {
        "id": row["id"],
        "principal_kind": kind.value,
        "email": row["email"],
        "status": row["status"],
    }
