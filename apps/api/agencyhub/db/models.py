"""SQLAlchemy ORM models for users, agencies, sub-accounts and their seeded records."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agencyhub.db.base import Base
from agencyhub.db.enums import DEFAULT_ROLE, InvitationStatus


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=_utcnow, server_default=func.now(), onupdate=_utcnow, nullable=False
    )


# =============================================================================
# Identity & Tenant Models
# =============================================================================

class User(TimestampMixin, Base):
    """
    Local mirror of an external identity.

    The primary key is the identity provider's user id; email is the
    lookup key used by every flow.
    """

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_agency_id", "agency_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEFAULT_ROLE.value
    )
    agency_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("agencies.id", ondelete="SET NULL"), nullable=True
    )

    agency: Mapped["Agency | None"] = relationship(back_populates="users")
    permissions: Mapped[list["Permission"]] = relationship(
        back_populates="user", cascade="all, delete"
    )
    notifications: Mapped[list["Notification"]] = relationship(
        back_populates="user", cascade="all, delete"
    )


class Agency(TimestampMixin, Base):
    """Tenant root owning sub-accounts, users and navigation entries."""

    __tablename__ = "agencies"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    connect_account_id: Mapped[str | None] = mapped_column(String(255), nullable=True, default="")
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    agency_logo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    company_email: Mapped[str] = mapped_column(String(320), nullable=False)
    company_phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    white_label: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    country: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    goal: Mapped[int] = mapped_column(Integer, nullable=False, default=5)

    users: Mapped[list["User"]] = relationship(back_populates="agency")
    sub_accounts: Mapped[list["SubAccount"]] = relationship(
        back_populates="agency", cascade="all, delete"
    )
    sidebar_options: Mapped[list["AgencySidebarOption"]] = relationship(
        back_populates="agency", cascade="all, delete"
    )
    invitations: Mapped[list["Invitation"]] = relationship(
        back_populates="agency", cascade="all, delete"
    )
    notifications: Mapped[list["Notification"]] = relationship(
        back_populates="agency", cascade="all, delete"
    )


class SubAccount(TimestampMixin, Base):
    """Child workspace under an agency."""

    __tablename__ = "sub_accounts"
    __table_args__ = (Index("ix_sub_accounts_agency_id", "agency_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    connect_account_id: Mapped[str | None] = mapped_column(String(255), nullable=True, default="")
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sub_account_logo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    company_email: Mapped[str] = mapped_column(String(320), nullable=False)
    company_phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    goal: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    country: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    agency_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False
    )

    agency: Mapped["Agency"] = relationship(back_populates="sub_accounts")
    permissions: Mapped[list["Permission"]] = relationship(
        back_populates="sub_account", cascade="all, delete"
    )
    sidebar_options: Mapped[list["SubAccountSidebarOption"]] = relationship(
        back_populates="sub_account", cascade="all, delete"
    )
    pipelines: Mapped[list["Pipeline"]] = relationship(
        back_populates="sub_account", cascade="all, delete"
    )
    notifications: Mapped[list["Notification"]] = relationship(
        back_populates="sub_account", cascade="all, delete"
    )


class Permission(Base):
    """Grants a user (by email) access to a sub-account."""

    __tablename__ = "permissions"
    __table_args__ = (
        Index("ix_permissions_email", "email"),
        Index("ix_permissions_sub_account_id", "sub_account_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(
        String(320), ForeignKey("users.email", ondelete="CASCADE"), nullable=False
    )
    sub_account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("sub_accounts.id", ondelete="CASCADE"), nullable=False
    )
    access: Mapped[bool] = mapped_column(Boolean, nullable=False)

    user: Mapped["User"] = relationship(back_populates="permissions")
    sub_account: Mapped["SubAccount"] = relationship(back_populates="permissions")


# =============================================================================
# Navigation
# =============================================================================

class AgencySidebarOption(TimestampMixin, Base):
    """Static navigation entry seeded when an agency is created."""

    __tablename__ = "agency_sidebar_options"
    __table_args__ = (Index("ix_agency_sidebar_options_agency_id", "agency_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="Menu")
    link: Mapped[str] = mapped_column(String(500), nullable=False, default="#")
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default="info")
    agency_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("agencies.id", ondelete="CASCADE"), nullable=True
    )

    agency: Mapped["Agency | None"] = relationship(back_populates="sidebar_options")


class SubAccountSidebarOption(TimestampMixin, Base):
    """Static navigation entry seeded when a sub-account is created."""

    __tablename__ = "sub_account_sidebar_options"
    __table_args__ = (
        Index("ix_sub_account_sidebar_options_sub_account_id", "sub_account_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="Menu")
    link: Mapped[str] = mapped_column(String(500), nullable=False, default="#")
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default="info")
    sub_account_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("sub_accounts.id", ondelete="CASCADE"), nullable=True
    )

    sub_account: Mapped["SubAccount | None"] = relationship(back_populates="sidebar_options")


class Pipeline(TimestampMixin, Base):
    """Lead pipeline; every sub-account starts with one."""

    __tablename__ = "pipelines"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sub_account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("sub_accounts.id", ondelete="CASCADE"), nullable=False
    )

    sub_account: Mapped["SubAccount"] = relationship(back_populates="pipelines")


# =============================================================================
# Onboarding & Activity
# =============================================================================

class Invitation(Base):
    """
    Pending onboarding record granting a role to an email.

    Constraint: one invitation per email. Consumed invitations are deleted.
    """

    __tablename__ = "invitations"
    __table_args__ = (Index("ix_invitations_agency_id", "agency_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    agency_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=InvitationStatus.PENDING.value
    )
    role: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEFAULT_ROLE.value
    )

    agency: Mapped["Agency"] = relationship(back_populates="invitations")


class Notification(TimestampMixin, Base):
    """Activity log entry; immutable once written."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_agency_created", "agency_id", "created_at"),
        Index("ix_notifications_sub_account_id", "sub_account_id"),
        Index("ix_notifications_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    notification: Mapped[str] = mapped_column(Text, nullable=False)
    agency_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False
    )
    sub_account_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("sub_accounts.id", ondelete="CASCADE"), nullable=True
    )
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="notifications")
    agency: Mapped["Agency"] = relationship(back_populates="notifications")
    sub_account: Mapped["SubAccount | None"] = relationship(back_populates="notifications")
