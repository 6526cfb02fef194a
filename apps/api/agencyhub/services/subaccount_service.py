"""Sub-account service - sub-account upsert with seeded permission, pipeline and navigation."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from agencyhub.core.structured_logging import build_log_context
from agencyhub.db.enums import Role
from agencyhub.db.models import (
    Permission,
    Pipeline,
    SubAccount,
    SubAccountSidebarOption,
    User,
)
from agencyhub.schemas.subaccount import SubAccountUpsert


logger = logging.getLogger(__name__)

DEFAULT_PIPELINE_NAME = "Lead Cycle"

# (name, icon, path suffix)
SUBACCOUNT_SIDEBAR_OPTIONS: tuple[tuple[str, str, str], ...] = (
    ("Launchpad", "clipboardIcon", "/launchpad"),
    ("Settings", "settings", "/settings"),
    ("Funnels", "pipelines", "/funnels"),
    ("Media", "database", "/media"),
    ("Automations", "chip", "/automations"),
    ("Pipelines", "flag", "/pipelines"),
    ("Contacts", "person", "/contacts"),
    ("Dashboard", "category", ""),
)


def build_subaccount_sidebar_options(sub_account_id: str) -> list[SubAccountSidebarOption]:
    return [
        SubAccountSidebarOption(
            name=name, icon=icon, link=f"/subaccount/{sub_account_id}{suffix}"
        )
        for name, icon, suffix in SUBACCOUNT_SIDEBAR_OPTIONS
    ]


def get_agency_owner(db: Session, agency_id: str) -> User | None:
    """The AGENCY_OWNER user of an agency, if any."""
    return (
        db.query(User)
        .filter(
            User.agency_id == agency_id,
            User.role == Role.AGENCY_OWNER.value,
        )
        .first()
    )


def upsert_subaccount(db: Session, sub_account: SubAccountUpsert) -> SubAccount | None:
    """
    Create or update a sub-account by primary key.

    Returns None without writing when company_email is missing, or when the
    parent agency has no owner (logged, not raised). On create the owner gets
    access, and a default pipeline plus sidebar navigation are seeded.
    Database failures are logged, rolled back and swallowed.
    """
    if not sub_account.company_email:
        return None

    agency_owner = get_agency_owner(db, sub_account.agency_id)
    if not agency_owner:
        logger.error(
            "Could not create subaccount: agency has no owner",
            extra=build_log_context(
                agency_id=sub_account.agency_id,
                subaccount_id=sub_account.id,
            ),
        )
        return None

    try:
        existing = db.query(SubAccount).filter(SubAccount.id == sub_account.id).first()
        if existing:
            for key, value in sub_account.model_dump(exclude={"id"}, exclude_unset=True).items():
                setattr(existing, key, value)
            db.commit()
            db.refresh(existing)
            return existing

        record = SubAccount(**sub_account.model_dump())
        record.permissions = [Permission(access=True, email=agency_owner.email)]
        record.pipelines = [Pipeline(name=DEFAULT_PIPELINE_NAME)]
        record.sidebar_options = build_subaccount_sidebar_options(record.id)
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Sub-account upsert failed",
            extra=build_log_context(
                agency_id=sub_account.agency_id,
                subaccount_id=sub_account.id,
            ),
        )
        return None

    logger.info(
        "Sub-account created",
        extra=build_log_context(
            user_id=agency_owner.id,
            agency_id=record.agency_id,
            subaccount_id=record.id,
        ),
    )
    return record


def get_subaccount_details(db: Session, sub_account_id: str) -> SubAccount | None:
    """Get a sub-account with its navigation and pipelines loaded."""
    return (
        db.query(SubAccount)
        .options(
            selectinload(SubAccount.sidebar_options),
            selectinload(SubAccount.pipelines),
        )
        .filter(SubAccount.id == sub_account_id)
        .first()
    )


def delete_subaccount(db: Session, sub_account_id: str) -> bool:
    """Delete a sub-account and its seeded rows."""
    sub_account = db.query(SubAccount).filter(SubAccount.id == sub_account_id).first()
    if not sub_account:
        return False

    db.delete(sub_account)
    db.commit()
    return True
