"""Pydantic schemas for team invitations."""

from pydantic import BaseModel, ConfigDict, EmailStr

from agencyhub.db.enums import InvitationStatus, Role


class InvitationCreate(BaseModel):
    email: EmailStr
    role: Role = Role.SUBACCOUNT_USER


class InvitationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    agency_id: str
    status: InvitationStatus
    role: Role
