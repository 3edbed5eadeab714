from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Platform = Literal["meta", "google_ads", "ga4", "tiktok"]


class ConnectedAccountCreate(BaseModel):
    platform: Platform
    account_id: str = Field(min_length=1, max_length=255)
    account_name: str = Field(min_length=1, max_length=255)
    access_token: str = Field(min_length=1)  # write-only, never returned


class ConnectedAccountResponse(BaseModel):
    id: str
    org_id: str
    platform: Platform
    account_id: str
    account_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
