from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class PrincipalKind(str, Enum):
    STAFF = "staff"
    CUSTOMER_USER = "customer-user"
    SUBCUSTOMER = "subcustomer"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING = "PENDING"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class Role:
    name: str
    description: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> Role:
        return cls(name=row["name"], description=row.get("description"))


@dataclass(frozen=True)
class OrganizationRecord:
    """Tenant company that customer users and sub-customers belong to."""
    id: str
    name: str
    company_name: str
    plan: str | None
    status: AccountStatus
    deleted_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict) -> OrganizationRecord:
        return cls(
            id=row["id"],
            name=row["name"],
            company_name=row.get("company_name") or row["name"],
            plan=row.get("plan"),
            status=AccountStatus(row.get("status") or AccountStatus.ACTIVE.value),
            deleted_at=_parse_timestamp(row.get("deleted_at")),
        )


@dataclass(frozen=True)
class PrincipalRecord:
    """A stored staff user, customer user or sub-customer, tagged by kind.

    `organization` is only filled in once the authenticator has resolved the
    owning organization; lookups return it as None.
    """
    kind: PrincipalKind
    id: str
    email: str
    name: str | None
    password_hash: str
    status: AccountStatus
    role: Role | None = None
    org_id: str | None = None
    organization: OrganizationRecord | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_row(cls, kind: PrincipalKind, row: dict, role: Role | None = None) -> PrincipalRecord:
        return cls(
            kind=kind,
            id=row["id"],
            email=row["email"],
            name=row.get("name"),
            password_hash=row["password_hash"],
            status=AccountStatus(row.get("status") or AccountStatus.ACTIVE.value),
            role=role,
            org_id=row.get("org_id"),
            deleted_at=_parse_timestamp(row.get("deleted_at")),
        )
