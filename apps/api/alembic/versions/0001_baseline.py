"""Baseline migration - agencies, sub-accounts, users and activity tables

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates every table of the agency hub schema.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create tenant, navigation and activity tables."""

    # ==========================================================================
    # Agencies
    # ==========================================================================
    op.create_table(
        "agencies",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("connect_account_id", sa.String(255), nullable=True),
        sa.Column("customer_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("agency_logo", sa.Text(), nullable=False),
        sa.Column("company_email", sa.String(320), nullable=False),
        sa.Column("company_phone", sa.String(50), nullable=False),
        sa.Column("white_label", sa.Boolean(), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("zip_code", sa.String(20), nullable=False),
        sa.Column("state", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("goal", sa.Integer(), nullable=False),
        *_timestamps(),
    )

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column(
            "agency_id",
            sa.String(64),
            sa.ForeignKey("agencies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_users_agency_id", "users", ["agency_id"])

    # ==========================================================================
    # Sub-accounts & permissions
    # ==========================================================================
    op.create_table(
        "sub_accounts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("connect_account_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sub_account_logo", sa.Text(), nullable=False),
        sa.Column("company_email", sa.String(320), nullable=False),
        sa.Column("company_phone", sa.String(50), nullable=False),
        sa.Column("goal", sa.Integer(), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("zip_code", sa.String(20), nullable=False),
        sa.Column("state", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column(
            "agency_id",
            sa.String(64),
            sa.ForeignKey("agencies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_sub_accounts_agency_id", "sub_accounts", ["agency_id"])

    op.create_table(
        "permissions",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "email",
            sa.String(320),
            sa.ForeignKey("users.email", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "sub_account_id",
            sa.String(64),
            sa.ForeignKey("sub_accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("access", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_permissions_email", "permissions", ["email"])
    op.create_index("ix_permissions_sub_account_id", "permissions", ["sub_account_id"])

    # ==========================================================================
    # Navigation & pipelines
    # ==========================================================================
    op.create_table(
        "agency_sidebar_options",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("link", sa.String(500), nullable=False),
        sa.Column("icon", sa.String(50), nullable=False),
        sa.Column(
            "agency_id",
            sa.String(64),
            sa.ForeignKey("agencies.id", ondelete="CASCADE"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index(
        "ix_agency_sidebar_options_agency_id", "agency_sidebar_options", ["agency_id"]
    )

    op.create_table(
        "sub_account_sidebar_options",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("link", sa.String(500), nullable=False),
        sa.Column("icon", sa.String(50), nullable=False),
        sa.Column(
            "sub_account_id",
            sa.String(64),
            sa.ForeignKey("sub_accounts.id", ondelete="CASCADE"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index(
        "ix_sub_account_sidebar_options_sub_account_id",
        "sub_account_sidebar_options",
        ["sub_account_id"],
    )

    op.create_table(
        "pipelines",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "sub_account_id",
            sa.String(64),
            sa.ForeignKey("sub_accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )

    # ==========================================================================
    # Invitations & notifications
    # ==========================================================================
    op.create_table(
        "invitations",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column(
            "agency_id",
            sa.String(64),
            sa.ForeignKey("agencies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
    )
    op.create_index("ix_invitations_agency_id", "invitations", ["agency_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("notification", sa.Text(), nullable=False),
        sa.Column(
            "agency_id",
            sa.String(64),
            sa.ForeignKey("agencies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "sub_account_id",
            sa.String(64),
            sa.ForeignKey("sub_accounts.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "user_id",
            sa.String(64),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index(
        "ix_notifications_agency_created", "notifications", ["agency_id", "created_at"]
    )
    op.create_index("ix_notifications_sub_account_id", "notifications", ["sub_account_id"])
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("notifications")
    op.drop_table("invitations")
    op.drop_table("pipelines")
    op.drop_table("sub_account_sidebar_options")
    op.drop_table("agency_sidebar_options")
    op.drop_table("permissions")
    op.drop_table("sub_accounts")
    op.drop_table("users")
    op.drop_table("agencies")
