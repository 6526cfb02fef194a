"""
Notification Service - agency activity log.

Rows are append-only and scoped to an agency and, optionally, a sub-account.
"""

import logging

from sqlalchemy.orm import Session, selectinload

from agencyhub.core.structured_logging import build_log_context
from agencyhub.db.models import Agency, Notification, SubAccount, User
from agencyhub.services.identity_service import Principal


logger = logging.getLogger(__name__)


def get_acting_user(
    db: Session,
    principal: Principal | None,
    subaccount_id: str | None = None,
) -> User:
    """
    Signed-in user, or any user of the agency owning the sub-account.

    Routers call this before their service commits so a missing actor
    rejects the request with nothing written.

    Raises:
        ValueError: No local user can act for the request
    """
    if principal is not None:
        user = db.query(User).filter(User.email == principal.email).first()
    else:
        user = (
            db.query(User)
            .join(Agency, User.agency_id == Agency.id)
            .join(SubAccount, SubAccount.agency_id == Agency.id)
            .filter(SubAccount.id == subaccount_id)
            .first()
        )

    if not user:
        raise ValueError("Could not find a user")
    return user


def _resolve_agency_id(
    db: Session,
    agency_id: str | None,
    subaccount_id: str | None,
) -> str | None:
    if agency_id:
        return agency_id

    if not subaccount_id:
        raise ValueError("You need to provide at least an agency Id or subaccount Id")

    sub_account = db.query(SubAccount).filter(SubAccount.id == subaccount_id).first()
    return sub_account.agency_id if sub_account else None


def save_activity_logs_notification(
    db: Session,
    principal: Principal | None,
    description: str,
    agency_id: str | None = None,
    subaccount_id: str | None = None,
) -> Notification:
    """
    Append an activity log row.

    Flushes only; the caller commits.

    Raises:
        ValueError: No acting user, or neither an agency nor a sub-account id
    """
    user = get_acting_user(db, principal, subaccount_id)

    found_agency_id = _resolve_agency_id(db, agency_id, subaccount_id)
    if not found_agency_id:
        raise ValueError("Could not find an agency for the notification")

    notification = Notification(
        notification=f"{user.name} | {description}",
        user_id=user.id,
        agency_id=found_agency_id,
        sub_account_id=subaccount_id or None,
    )
    db.add(notification)
    db.flush()

    logger.info(
        "Activity logged",
        extra=build_log_context(
            user_id=user.id,
            agency_id=found_agency_id,
            subaccount_id=subaccount_id,
        ),
    )
    return notification


def get_notification_and_user(db: Session, agency_id: str) -> list[Notification]:
    """List an agency's activity log (newest first) with the acting user loaded."""
    return (
        db.query(Notification)
        .options(selectinload(Notification.user))
        .filter(Notification.agency_id == agency_id)
        .order_by(Notification.created_at.desc())
        .all()
    )
