"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.db.enums import Role
from agencyhub.schemas.agency import SidebarOptionRead


class UserInit(BaseModel):
    """Request schema for POST /users/init."""
    role: Role | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    avatar_url: str | None = None


class PermissionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    sub_account_id: str
    access: bool


class UserRead(BaseModel):
    """Response schema for a user row."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    avatar_url: str
    role: Role
    agency_id: str | None


class SubAccountSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    sidebar_options: list[SidebarOptionRead] = []


class AgencySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    sidebar_options: list[SidebarOptionRead] = []
    sub_accounts: list[SubAccountSummary] = []


class AuthUserDetails(UserRead):
    """GET /users/me: the user with agency navigation and permissions."""
    agency: AgencySummary | None = None
    permissions: list[PermissionRead] = []
