from dataclasses import dataclass

from src.auth.claims import SessionClaims
from src.domain.principals import PrincipalKind


@dataclass(frozen=True)
class RequestContext:
    """Identity context injected into guarded requests."""
    principal_id: str
    principal_kind: PrincipalKind
    effective_role: str
    email: str
    display_name: str | None = None
    organization_id: str | None = None  # None for staff, which operate above the tenant layer
    organization_role: str | None = None

    @classmethod
    def from_claims(cls, claims: SessionClaims) -> "RequestContext":
        return cls(
            principal_id=claims.principal_id,
            principal_kind=claims.principal_kind,
            effective_role=claims.effective_role,
            email=claims.email,
            display_name=claims.display_name,
            organization_id=claims.organization_id,
            organization_role=claims.organization_role,
        )
