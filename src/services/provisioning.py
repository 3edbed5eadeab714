from __future__ import annotations

from typing import Any

from postgrest.exceptions import APIError

from src.auth.context import RequestContext
from src.auth.passwords import hash_password
from src.domain.errors import ConflictError
from src.models.organizations import OrganizationProvision
from src.observability import log_event
from src.services.organizations import ensure_can_mutate_organizations

UNIQUE_VIOLATION = "23505"

OWNER_EMAIL_CONFLICT = "A customer user with this email already exists"


def _owner_email_taken(client: Any, email: str) -> bool:
    result = client.table("customer_users").select("id").eq(
        "email", email
    ).is_("deleted_at", "null").execute()
    return bool(result.data)


def provision_organization(
    client: Any,
    data: OrganizationProvision,
    actor: RequestContext,
) -> dict:
    """
    Create an organization together with its initial Owner user.

    Both rows are written by the `provision_organization` database function,
    so either both exist afterwards or neither does. A duplicate owner email
    is reported as a conflict before anything is written; the unique index
    catches the race where another request takes the email in between.
    """
    ensure_can_mutate_organizations(actor)

    if _owner_email_taken(client, data.owner_email):
        raise ConflictError(OWNER_EMAIL_CONFLICT)

    params = {
        "p_name": data.name,
        "p_company_name": data.company_name,
        "p_plan": data.plan,
        "p_owner_name": data.owner_name,
        "p_owner_email": data.owner_email,
        "p_owner_password_hash": hash_password(data.owner_password),
    }
    try:
        result = client.rpc("provision_organization", params).execute()
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            raise ConflictError(OWNER_EMAIL_CONFLICT) from exc
        raise

    provisioned = result.data
    log_event(
        "organization_provisioned",
        org_id=provisioned["organization"]["id"],
        owner_id=provisioned["owner"]["id"],
        actor_id=actor.principal_id,
    )
    return provisioned
