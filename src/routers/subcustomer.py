from dataclasses import asdict

from fastapi import APIRouter, Depends

from src.auth import RequestContext, require_subcustomer_session
from src.models.auth import SessionResponse

router = APIRouter(prefix="/api/subcustomer", tags=["subcustomer"])


@router.get("/session", response_model=SessionResponse)
async def get_subcustomer_session(auth: RequestContext = Depends(require_subcustomer_session)):
    """Current sub-customer identity as seen by the route guard."""
    return SessionResponse(**asdict(auth))
