from __future__ import annotations

from typing import Any, Protocol

from src.domain.principals import (
    OrganizationRecord,
    PrincipalKind,
    PrincipalRecord,
    Role,
    normalize_email,
)


class PrincipalSource(Protocol):
    """Read access to one kind of principal, as needed by the authenticator."""

    @property
    def kind(self) -> PrincipalKind: ...

    @property
    def requires_organization(self) -> bool: ...

    def lookup_by_email(self, email: str) -> PrincipalRecord | None: ...

    def get_by_id(self, principal_id: str) -> PrincipalRecord | None: ...

    def get_owning_organization(self, principal: PrincipalRecord) -> OrganizationRecord | None: ...


PRINCIPAL_TABLES: dict[PrincipalKind, str] = {
    PrincipalKind.STAFF: "staff_users",
    PrincipalKind.CUSTOMER_USER: "customer_users",
    PrincipalKind.SUBCUSTOMER: "sub_customers",
}


def fetch_organization(client: Any, org_id: str | None) -> OrganizationRecord | None:
    """Load a non-deleted organization by id."""
    if not org_id:
        return None
    result = client.table("organizations").select(
        "id, name, company_name, plan, status, deleted_at"
    ).eq("id", org_id).is_("deleted_at", "null").execute()
    if not result.data:
        return None
    return OrganizationRecord.from_row(result.data[0])


class SupabasePrincipalSource:
    """Principal lookups against one Supabase table.

    Rows are selected whatever their status; soft-deleted rows are filtered
    out in the query so they never reach the caller. Emails are stored
    lower-cased, so an exact match on the normalized email is case-insensitive.
    """

    columns = "id, email, name, password_hash, status, role_id, org_id, deleted_at"

    def __init__(
        self,
        client: Any,
        *,
        kind: PrincipalKind,
        role_table: str | None,
        requires_organization: bool,
        columns: str | None = None,
    ):
        self.client = client
        self.kind = kind
        self.table = PRINCIPAL_TABLES[kind]
        self.role_table = role_table
        self.requires_organization = requires_organization
        if columns:
            self.columns = columns

    def _first(self, query) -> PrincipalRecord | None:
        result = query.is_("deleted_at", "null").execute()
        if not result.data:
            return None
        row = result.data[0]
        return PrincipalRecord.from_row(self.kind, row, role=self._load_role(row.get("role_id")))

    def _load_role(self, role_id: str | None) -> Role | None:
        if not self.role_table or not role_id:
            return None
        result = self.client.table(self.role_table).select(
            "id, name, description"
        ).eq("id", role_id).execute()
        if not result.data:
            return None
        return Role.from_row(result.data[0])

    def lookup_by_email(self, email: str) -> PrincipalRecord | None:
        normalized = normalize_email(email)
        if not normalized:
            return None
        return self._first(
            self.client.table(self.table).select(self.columns).eq("email", normalized)
        )

    def get_by_id(self, principal_id: str) -> PrincipalRecord | None:
        return self._first(
            self.client.table(self.table).select(self.columns).eq("id", principal_id)
        )

    def get_owning_organization(self, principal: PrincipalRecord) -> OrganizationRecord | None:
        if not self.requires_organization:
            return None
        return fetch_organization(self.client, principal.org_id)


def principal_source(kind: PrincipalKind, client: Any) -> SupabasePrincipalSource:
    kind = PrincipalKind(kind)
    if kind == PrincipalKind.STAFF:
        return SupabasePrincipalSource(
            client,
            kind=kind,
            role_table="staff_roles",
            requires_organization=False,
            columns="id, email, name, password_hash, status, role_id, deleted_at",
        )
    if kind == PrincipalKind.CUSTOMER_USER:
        return SupabasePrincipalSource(
            client,
            kind=kind,
            role_table="customer_roles",
            requires_organization=True,
        )
    return SupabasePrincipalSource(
        client,
        kind=kind,
        role_table=None,
        requires_organization=True,
        columns="id, email, name, password_hash, status, org_id, deleted_at",
    )
