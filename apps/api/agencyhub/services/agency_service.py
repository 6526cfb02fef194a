"""Agency service - agency upsert with seeded navigation."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agencyhub.core.structured_logging import build_log_context
from agencyhub.db.models import Agency, AgencySidebarOption, User
from agencyhub.schemas.agency import AgencyUpsert


logger = logging.getLogger(__name__)

# (name, icon, path suffix); seeded once on agency creation, never recomputed
AGENCY_SIDEBAR_OPTIONS: tuple[tuple[str, str, str], ...] = (
    ("Dashboard", "category", ""),
    ("Launchpad", "clipboardIcon", "/launchpad"),
    ("Billing", "payment", "/billing"),
    ("Settings", "settings", "/settings"),
    ("Sub Accounts", "person", "/all-subaccounts"),
    ("Team", "shield", "/team"),
)


def build_agency_sidebar_options(agency_id: str) -> list[AgencySidebarOption]:
    return [
        AgencySidebarOption(name=name, icon=icon, link=f"/agency/{agency_id}{suffix}")
        for name, icon, suffix in AGENCY_SIDEBAR_OPTIONS
    ]


def get_agency(db: Session, agency_id: str) -> Agency | None:
    """Get agency by ID."""
    return db.query(Agency).filter(Agency.id == agency_id).first()


def upsert_agency(db: Session, agency: AgencyUpsert) -> Agency | None:
    """
    Create or update an agency by primary key.

    On create, connects the user owning company_email to the agency and seeds
    the sidebar navigation. Returns None (no writes) when company_email is
    missing; failures are logged and swallowed.
    """
    if not agency.company_email:
        return None

    try:
        existing = get_agency(db, agency.id)
        if existing:
            for key, value in agency.model_dump(exclude={"id"}, exclude_unset=True).items():
                setattr(existing, key, value)
            db.commit()
            db.refresh(existing)
            return existing

        owner = db.query(User).filter(User.email == agency.company_email).first()
        if not owner:
            raise LookupError(f"No user to connect for agency {agency.id}")

        record = Agency(**agency.model_dump())
        record.sidebar_options = build_agency_sidebar_options(record.id)
        db.add(record)
        db.flush()

        owner.agency_id = record.id
        db.commit()
        db.refresh(record)

        logger.info(
            "Agency created",
            extra=build_log_context(user_id=owner.id, agency_id=record.id),
        )
        return record
    except (SQLAlchemyError, LookupError):
        db.rollback()
        logger.exception(
            "Agency upsert failed",
            extra=build_log_context(agency_id=agency.id),
        )
        return None


def update_agency_details(
    db: Session,
    agency_id: str,
    details: dict[str, Any],
) -> Agency | None:
    """Apply a partial update; returns None if the agency does not exist."""
    agency = get_agency(db, agency_id)
    if not agency:
        return None

    for key, value in details.items():
        if key == "id" or not hasattr(Agency, key):
            continue
        setattr(agency, key, value)

    db.commit()
    db.refresh(agency)
    return agency


def delete_agency(db: Session, agency_id: str) -> bool:
    """
    Delete an agency (cascades to its sub-accounts and seeded rows).

    Members are kept and detached from the agency.
    """
    agency = get_agency(db, agency_id)
    if not agency:
        return False

    db.delete(agency)
    db.commit()
    return True
