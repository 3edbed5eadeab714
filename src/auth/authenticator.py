from __future__ import annotations

from dataclasses import dataclass, replace

from src.auth.passwords import burn_verification, verify_password
from src.domain.auth_errors import (
    RejectionReason,
    account_status_reason,
    organization_status_reason,
)
from src.domain.principals import OrganizationRecord, PrincipalRecord
from src.store.principals import PrincipalSource


@dataclass(frozen=True)
class AuthSuccess:
    principal: PrincipalRecord


@dataclass(frozen=True)
class AuthRejected:
    reason: RejectionReason


AuthResult = AuthSuccess | AuthRejected


def evaluate_status_gates(
    principal: PrincipalRecord,
    organization: OrganizationRecord | None,
) -> RejectionReason | None:
    """Apply the status gates in precedence order: organization, then account."""
    if organization is not None:
        reason = organization_status_reason(organization.status)
        if reason is not None:
            return reason
    return account_status_reason(principal.status)


def authenticate(source: PrincipalSource, email: str, password: str) -> AuthResult:
    """
    Decide whether an email/password pair may sign in as `source.kind`.

    The password is always verified before any status is looked at, so a
    caller without the password only ever sees InvalidCredentials. Store
    failures are not caught here.
    """
    principal = source.lookup_by_email(email)
    if principal is None:
        burn_verification(password or "")
        return AuthRejected(RejectionReason.INVALID_CREDENTIALS)

    if not password or not verify_password(password, principal.password_hash):
        return AuthRejected(RejectionReason.INVALID_CREDENTIALS)

    organization = source.get_owning_organization(principal)
    if source.requires_organization and organization is None:
        return AuthRejected(RejectionReason.INVALID_CREDENTIALS)

    reason = evaluate_status_gates(principal, organization)
    if reason is not None:
        return AuthRejected(reason)

    return AuthSuccess(replace(principal, organization=organization))
