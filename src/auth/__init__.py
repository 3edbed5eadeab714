from src.auth.context import RequestContext
from src.auth.dependencies import (
    SignInRequired,
    require_customer_session,
    require_staff_session,
    require_subcustomer_session,
)
from src.auth.jwt import create_session_token, decode_session_token

__all__ = [
    "RequestContext",
    "SignInRequired",
    "require_customer_session",
    "require_staff_session",
    "require_subcustomer_session",
    "create_session_token",
    "decode_session_token",
]
