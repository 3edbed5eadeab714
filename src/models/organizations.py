from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from src.domain.principals import AccountStatus

PlanInput = Literal["basic", "pro", "enterprise"]

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class OrganizationProvision(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    company_name: str = Field(min_length=2, max_length=255)
    plan: PlanInput
    owner_name: str = Field(min_length=2, max_length=255)
    owner_email: EmailStr
    owner_password: str = Field(min_length=6)

    @field_validator("name", "company_name", "owner_name", mode="before")
    @classmethod
    def _strip_names(cls, value):
        return _strip(value)

    @field_validator("owner_email", mode="after")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("owner_password", mode="after")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class OrganizationUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    company_name: str | None = Field(default=None, min_length=2, max_length=255)
    plan: PlanInput | None = None

    @field_validator("name", "company_name", mode="before")
    @classmethod
    def _strip_names(cls, value):
        return _strip(value)

    @model_validator(mode="after")
    def _has_changes(self) -> "OrganizationUpdate":
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one of name, company_name or plan is required")
        return self


class OrganizationResponse(BaseModel):
    id: str
    name: str
    company_name: str
    plan: str | None = None
    status: AccountStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OwnerResponse(BaseModel):
    id: str
    org_id: str
    email: str
    name: str | None = None
    role: str
    status: AccountStatus


class ProvisionResponse(BaseModel):
    organization: OrganizationResponse
    owner: OwnerResponse


class StatusUpdate(BaseModel):
    status: AccountStatus


class PrincipalStatusResponse(BaseModel):
    id: str
    principal_kind: str
    email: str
    status: AccountStatus
