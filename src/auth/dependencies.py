from urllib.parse import urlencode

from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from src.auth.authenticator import evaluate_status_gates
from src.auth.claims import SessionClaims
from src.auth.context import RequestContext
from src.auth.jwt import decode_session_token
from src.auth.permissions import SIGN_IN_PATHS, tree_accepts
from src.config import settings
from src.db import supabase
from src.domain.principals import PrincipalKind
from src.observability import record_session_rejected
from src.store.principals import principal_source


class SignInRequired(Exception):
    """Raised by a route guard; rendered as a redirect to the tree's sign-in page."""

    def __init__(self, tree: PrincipalKind, callback_url: str, reason: str):
        self.tree = tree
        self.callback_url = callback_url
        self.reason = reason
        super().__init__(f"{tree.value} sign-in required ({reason})")

    @property
    def sign_in_url(self) -> str:
        return f"{SIGN_IN_PATHS[self.tree]}?{urlencode({'callbackUrl': self.callback_url})}"


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extract token from 'Bearer <token>' header."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def _session_token(request: Request) -> str | None:
    """Session cookie first; bearer header for non-browser callers."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    return _extract_bearer_token(request.headers.get("Authorization"))


def _callback_target(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def _session_still_permitted(claims: SessionClaims) -> bool:
    """Re-read the principal and its organization and re-apply the status gates."""
    source = principal_source(claims.principal_kind, supabase)
    principal = source.get_by_id(claims.principal_id)
    if principal is None:
        return False
    organization = source.get_owning_organization(principal)
    if source.requires_organization and organization is None:
        return False
    return evaluate_status_gates(principal, organization) is None


def _reject(request: Request, tree: PrincipalKind, reason: str) -> SignInRequired:
    record_session_rejected(
        tree.value,
        reason,
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
    )
    return SignInRequired(tree, _callback_target(request), reason)


def _route_guard(tree: PrincipalKind):
    async def _require(request: Request) -> RequestContext:
        token = _session_token(request)
        if not token:
            raise _reject(request, tree, "missing_session")

        claims = decode_session_token(token)
        if claims is None:
            raise _reject(request, tree, "invalid_session")

        if claims.principal_kind != tree or not tree_accepts(
            tree, claims.effective_role, claims.organization_id
        ):
            raise _reject(request, tree, "wrong_portal")

        if settings.session_status_recheck:
            if not await run_in_threadpool(_session_still_permitted, claims):
                raise _reject(request, tree, "status_revoked")

        return RequestContext.from_claims(claims)

    _require.__name__ = f"require_{tree.name.lower()}_session"
    return _require


require_staff_session = _route_guard(PrincipalKind.STAFF)
require_customer_session = _route_guard(PrincipalKind.CUSTOMER_USER)
require_subcustomer_session = _route_guard(PrincipalKind.SUBCUSTOMER)
