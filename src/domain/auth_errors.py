from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Literal

from src.domain.principals import AccountStatus


class RejectionReason(str, Enum):
    INVALID_CREDENTIALS = "InvalidCredentials"
    ACCOUNT_INACTIVE = "AccountInactive"
    ACCOUNT_SUSPENDED = "AccountSuspended"
    ACCOUNT_PENDING = "AccountPending"
    ORGANIZATION_INACTIVE = "OrganizationInactive"
    ORGANIZATION_SUSPENDED = "OrganizationSuspended"
    ORGANIZATION_PENDING = "OrganizationPending"


_ACCOUNT_REASONS = {
    AccountStatus.INACTIVE: RejectionReason.ACCOUNT_INACTIVE,
    AccountStatus.SUSPENDED: RejectionReason.ACCOUNT_SUSPENDED,
    AccountStatus.PENDING: RejectionReason.ACCOUNT_PENDING,
}

_ORGANIZATION_REASONS = {
    AccountStatus.INACTIVE: RejectionReason.ORGANIZATION_INACTIVE,
    AccountStatus.SUSPENDED: RejectionReason.ORGANIZATION_SUSPENDED,
    AccountStatus.PENDING: RejectionReason.ORGANIZATION_PENDING,
}


def account_status_reason(status: AccountStatus) -> RejectionReason | None:
    return _ACCOUNT_REASONS.get(status)


def organization_status_reason(status: AccountStatus) -> RejectionReason | None:
    return _ORGANIZATION_REASONS.get(status)


ErrorCategory = Literal["credentials", "server"]


@dataclass(frozen=True)
class AuthErrorSurface:
    """User-facing copy for a failed sign-in."""
    category: ErrorCategory
    headline: str
    detail: str

    def as_detail(self) -> dict[str, Any]:
        return asdict(self)


_SURFACES: dict[RejectionReason, AuthErrorSurface] = {
    RejectionReason.INVALID_CREDENTIALS: AuthErrorSurface(
        category="credentials",
        headline="Invalid credentials",
        detail="The email or password you entered is incorrect. Please try again.",
    ),
    RejectionReason.ACCOUNT_INACTIVE: AuthErrorSurface(
        category="credentials",
        headline="Account disabled",
        detail="Your account is temporarily disabled. Contact your administrator to reactivate it.",
    ),
    RejectionReason.ACCOUNT_SUSPENDED: AuthErrorSurface(
        category="credentials",
        headline="Account suspended",
        detail="Your account has been suspended. Contact support for assistance.",
    ),
    RejectionReason.ACCOUNT_PENDING: AuthErrorSurface(
        category="credentials",
        headline="Account pending approval",
        detail="Your account is pending approval. You will be able to sign in once it is activated.",
    ),
    RejectionReason.ORGANIZATION_INACTIVE: AuthErrorSurface(
        category="credentials",
        headline="Organization disabled",
        detail="Your organization's account is temporarily disabled. Contact support to reactivate it.",
    ),
    RejectionReason.ORGANIZATION_SUSPENDED: AuthErrorSurface(
        category="credentials",
        headline="Organization suspended",
        detail="Your organization's account has been suspended. Contact support for assistance.",
    ),
    RejectionReason.ORGANIZATION_PENDING: AuthErrorSurface(
        category="credentials",
        headline="Organization pending approval",
        detail="Your organization's account is pending approval. You will be able to sign in once it is activated.",
    ),
}

_SERVER_SURFACE = AuthErrorSurface(
    category="server",
    headline="Server error",
    detail="Our servers are experiencing issues. Please try again later.",
)


def map_rejection(reason: RejectionReason) -> AuthErrorSurface:
    return _SURFACES[RejectionReason(reason)]


def server_error_surface() -> AuthErrorSurface:
    return _SERVER_SURFACE
