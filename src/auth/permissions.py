from __future__ import annotations

from typing import Final

from src.domain.principals import PrincipalKind

ADMINISTRATOR: Final[str] = "Administrator"
SUPPORT_AGENT: Final[str] = "Support Agent"

STAFF_ROLES: Final[frozenset[str]] = frozenset({ADMINISTRATOR, SUPPORT_AGENT})

CUSTOMER_USER_MARKER: Final[str] = "customer-user"
SUBCUSTOMER_MARKER: Final[str] = "subcustomer"

ORGANIZATION_MUTATING_ROLES: Final[frozenset[str]] = STAFF_ROLES

SIGN_IN_PATHS: Final[dict[PrincipalKind, str]] = {
    PrincipalKind.STAFF: "/auth/staff/signin",
    PrincipalKind.CUSTOMER_USER: "/auth/customer/signin",
    PrincipalKind.SUBCUSTOMER: "/auth/subcustomer/signin",
}

LANDING_PATHS: Final[dict[PrincipalKind, str]] = {
    PrincipalKind.STAFF: "/staff/dashboard",
    PrincipalKind.CUSTOMER_USER: "/customer/dashboard",
    PrincipalKind.SUBCUSTOMER: "/subcustomer/dashboard",
}


def is_staff_role(role: str | None) -> bool:
    return role in STAFF_ROLES


def can_mutate_organizations(role: str | None) -> bool:
    return role in ORGANIZATION_MUTATING_ROLES


def tree_accepts(tree: PrincipalKind, effective_role: str | None, organization_id: str | None) -> bool:
    """Whether claims with this role/organization belong in the given route tree."""
    if tree == PrincipalKind.STAFF:
        return is_staff_role(effective_role)
    if not organization_id:
        return False
    if tree == PrincipalKind.CUSTOMER_USER:
        return effective_role == CUSTOMER_USER_MARKER
    return effective_role == SUBCUSTOMER_MARKER
