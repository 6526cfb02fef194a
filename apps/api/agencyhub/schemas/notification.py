"""Pydantic schemas for activity log notifications."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    avatar_url: str
    email: str


class NotificationRead(BaseModel):
    """Activity log entry with its acting user."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    notification: str
    agency_id: str
    sub_account_id: str | None
    user_id: str
    created_at: datetime
    user: NotificationUser


class NotificationListResponse(BaseModel):
    items: list[NotificationRead]
