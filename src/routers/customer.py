from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from src.auth import RequestContext, require_customer_session
from src.db import supabase
from src.domain.errors import ServiceError, service_error_detail, service_error_http_status
from src.models.accounts import ConnectedAccountCreate, ConnectedAccountResponse
from src.models.auth import SessionResponse
from src.services import accounts as account_service

router = APIRouter(prefix="/api/customer", tags=["customer"])


@router.get("/session", response_model=SessionResponse)
async def get_customer_session(auth: RequestContext = Depends(require_customer_session)):
    """Current customer-user identity as seen by the route guard."""
    return SessionResponse(**asdict(auth))


@router.get("/accounts", response_model=list[ConnectedAccountResponse])
async def list_connected_accounts(auth: RequestContext = Depends(require_customer_session)):
    """List the organization's connected ad accounts."""
    return await run_in_threadpool(
        account_service.list_connected_accounts, supabase, auth.organization_id
    )


@router.post(
    "/accounts",
    response_model=ConnectedAccountResponse,
    status_code=status.HTTP_201_CREATED,
)
async def connect_account(
    data: ConnectedAccountCreate,
    auth: RequestContext = Depends(require_customer_session),
):
    try:
        return await run_in_threadpool(account_service.connect_account, supabase, data, auth)
    except ServiceError as exc:
        raise HTTPException(
            status_code=service_error_http_status(exc),
            detail=service_error_detail(exc),
        )
