"""Pydantic schemas for sub-accounts."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.schemas.agency import SidebarOptionRead


class SubAccountUpsert(BaseModel):
    """Request schema for creating or updating a sub-account."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), max_length=64)
    agency_id: str = Field(..., max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    company_email: str | None = Field(None, max_length=320)
    company_phone: str = Field("", max_length=50)
    sub_account_logo: str = ""
    address: str = Field("", max_length=255)
    city: str = Field("", max_length=100)
    zip_code: str = Field("", max_length=20)
    state: str = Field("", max_length=100)
    country: str = Field("", max_length=100)
    goal: int = Field(5, ge=0)
    connect_account_id: str | None = ""


class PipelineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class SubAccountRead(BaseModel):
    """Response schema for a sub-account."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    agency_id: str
    name: str
    company_email: str
    company_phone: str
    sub_account_logo: str
    address: str
    city: str
    zip_code: str
    state: str
    country: str
    goal: int
    created_at: datetime
    updated_at: datetime
    sidebar_options: list[SidebarOptionRead] = []
    pipelines: list[PipelineRead] = []
