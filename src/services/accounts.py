from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from src.auth.context import RequestContext
from src.domain.errors import ConflictError
from src.models.accounts import ConnectedAccountCreate
from src.observability import log_event

# Never includes access_token.
ACCOUNT_COLUMNS = "id, org_id, platform, account_id, account_name, created_at, updated_at"


def list_connected_accounts(client: Any, org_id: str) -> list[dict]:
    result = client.table("connected_ad_accounts").select(ACCOUNT_COLUMNS).eq(
        "org_id", org_id
    ).is_("deleted_at", "null").execute()
    return result.data


def connect_account(client: Any, data: ConnectedAccountCreate, actor: RequestContext) -> dict:
    """Store an ad-platform account and its access token under the actor's organization."""
    org_id = actor.organization_id
    existing = client.table("connected_ad_accounts").select("id").eq(
        "org_id", org_id
    ).eq("platform", data.platform).eq(
        "account_id", data.account_id
    ).is_("deleted_at", "null").execute()
    if existing.data:
        raise ConflictError("Account already connected for this platform")

    now = datetime.now(timezone.utc).isoformat()
    result = client.table("connected_ad_accounts").insert({
        "org_id": org_id,
        "platform": data.platform,
        "account_id": data.account_id,
        "account_name": data.account_name,
        "access_token": data.access_token,
        "created_at": now,
        "updated_at": now,
    }).execute()

    account = result.data[0]
    log_event(
        "ad_account_connected",
        org_id=org_id,
        platform=data.platform,
        account_id=data.account_id,
        actor_id=actor.principal_id,
    )
    return {key: account.get(key) for key in ACCOUNT_COLUMNS.split(", ")}
