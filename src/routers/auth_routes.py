import logging

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from src.auth.authenticator import AuthRejected, authenticate
from src.auth.claims import build_claims
from src.auth.jwt import create_session_token
from src.auth.permissions import LANDING_PATHS
from src.config import settings
from src.db import supabase
from src.domain.auth_errors import map_rejection, server_error_surface
from src.domain.principals import PrincipalKind
from src.models.auth import SignInRequest, SignInResponse, SignOutResponse
from src.observability import record_sign_in
from src.store.principals import principal_source

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.jwt_expiration_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


async def _sign_in(
    kind: PrincipalKind,
    data: SignInRequest,
    request: Request,
    response: Response,
) -> SignInResponse:
    request_id = getattr(request.state, "request_id", None)
    source = principal_source(kind, supabase)

    try:
        result = await run_in_threadpool(authenticate, source, data.email, data.password)
    except Exception as e:
        record_sign_in(
            kind.value,
            "store_error",
            request_id=request_id,
            level=logging.ERROR,
            error_type=type(e).__name__,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=server_error_surface().as_detail(),
        )

    if isinstance(result, AuthRejected):
        record_sign_in(kind.value, "rejected", request_id=request_id, reason=result.reason.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=map_rejection(result.reason).as_detail(),
        )

    try:
        claims = build_claims(result.principal)
    except ValueError as e:
        # Principal row without a resolvable role or organization.
        record_sign_in(
            kind.value,
            "claims_error",
            request_id=request_id,
            level=logging.ERROR,
            principal_id=result.principal.id,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=server_error_surface().as_detail(),
        )

    _set_session_cookie(response, create_session_token(claims))
    record_sign_in(
        kind.value,
        "succeeded",
        request_id=request_id,
        principal_id=claims.principal_id,
        organization_id=claims.organization_id,
    )
    return SignInResponse(principal_kind=kind, redirect_to=LANDING_PATHS[kind])


@router.post("/staff/signin", response_model=SignInResponse)
async def staff_sign_in(data: SignInRequest, request: Request, response: Response):
    """Sign in to the staff portal."""
    return await _sign_in(PrincipalKind.STAFF, data, request, response)


@router.post("/customer/signin", response_model=SignInResponse)
async def customer_sign_in(data: SignInRequest, request: Request, response: Response):
    """Sign in to the customer portal."""
    return await _sign_in(PrincipalKind.CUSTOMER_USER, data, request, response)


@router.post("/subcustomer/signin", response_model=SignInResponse)
async def subcustomer_sign_in(data: SignInRequest, request: Request, response: Response):
    """Sign in to the sub-customer portal."""
    return await _sign_in(PrincipalKind.SUBCUSTOMER, data, request, response)


@router.post("/signout", response_model=SignOutResponse)
async def sign_out(response: Response):
    """Drop the session cookie. Tokens copied elsewhere stay valid until they expire."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return SignOutResponse()
