"""Pydantic schemas for API request/response models."""

from agencyhub.schemas.agency import (
    AgencyOnboarding,
    AgencyRead,
    AgencyUpdate,
    AgencyUpsert,
    SidebarOptionRead,
)
from agencyhub.schemas.invitation import InvitationCreate, InvitationRead
from agencyhub.schemas.notification import NotificationListResponse, NotificationRead
from agencyhub.schemas.subaccount import SubAccountRead, SubAccountUpsert
from agencyhub.schemas.user import AuthUserDetails, UserInit, UserRead
