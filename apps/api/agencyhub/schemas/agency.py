"""Pydantic schemas for agencies."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SidebarOptionRead(BaseModel):
    """Seeded navigation entry."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str
    link: str


class AgencyUpsert(BaseModel):
    """
    Request schema for creating or updating an agency.

    company_email is optional here: an agency without one is silently
    rejected by the service rather than by validation.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    company_email: str | None = Field(None, max_length=320)
    company_phone: str = Field("", max_length=50)
    agency_logo: str = ""
    white_label: bool = True
    address: str = Field("", max_length=255)
    city: str = Field("", max_length=100)
    zip_code: str = Field("", max_length=20)
    state: str = Field("", max_length=100)
    country: str = Field("", max_length=100)
    goal: int = Field(5, ge=0)
    connect_account_id: str | None = ""
    customer_id: str = ""


class AgencyUpdate(BaseModel):
    """Partial agency update (only provided fields are applied)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    company_email: str | None = Field(None, max_length=320)
    company_phone: str | None = Field(None, max_length=50)
    agency_logo: str | None = None
    white_label: bool | None = None
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    goal: int | None = Field(None, ge=0)
    connect_account_id: str | None = None
    customer_id: str | None = None


class AgencyRead(BaseModel):
    """Response schema for an agency."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    company_email: str
    company_phone: str
    agency_logo: str
    white_label: bool
    address: str
    city: str
    zip_code: str
    state: str
    country: str
    goal: int
    created_at: datetime
    updated_at: datetime
    sidebar_options: list[SidebarOptionRead] = []


class AgencyOnboarding(BaseModel):
    """Returned by the landing route when the user has no agency yet."""
    company_email: str
