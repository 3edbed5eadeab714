from pydantic import BaseModel

from src.domain.principals import PrincipalKind


class SignInRequest(BaseModel):
    email: str  # malformed addresses fall through to InvalidCredentials
    password: str


class SignInResponse(BaseModel):
    ok: bool = True
    principal_kind: PrincipalKind
    redirect_to: str


class SignOutResponse(BaseModel):
    ok: bool = True


class SessionResponse(BaseModel):
    principal_id: str
    principal_kind: PrincipalKind
    effective_role: str
    email: str
    display_name: str | None = None
    organization_id: str | None = None
    organization_role: str | None = None
