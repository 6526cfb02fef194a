"""
Invitation service - team onboarding.

An invitation grants a role in an agency to an email address. It is
consumed (deleted) the first time its invitee signs in, so acceptance is
at-most-once; the unique email constraint guards concurrent acceptance.
"""

import logging

from sqlalchemy.orm import Session

from agencyhub.core.config import settings
from agencyhub.core.structured_logging import build_log_context
from agencyhub.db.enums import DEFAULT_ROLE, InvitationStatus, Role
from agencyhub.db.models import Invitation
from agencyhub.services import notification_service, user_service
from agencyhub.services.identity_service import (
    AuthenticationRequired,
    IdentityProvider,
    Principal,
)


logger = logging.getLogger(__name__)

SIGN_UP_PATH = "/agency/sign-up"


def get_pending_invitation(db: Session, email: str) -> Invitation | None:
    """Find the PENDING invitation for an email."""
    return db.query(Invitation).filter(
        Invitation.email == email,
        Invitation.status == InvitationStatus.PENDING.value,
    ).first()


def send_invitation(
    db: Session,
    identity: IdentityProvider,
    agency_id: str,
    email: str,
    role: Role | str = DEFAULT_ROLE,
) -> Invitation:
    """
    Create a PENDING invitation and have the provider email the invitee.

    The row is only committed once the provider accepted the invitation.

    Raises:
        ValueError: An invitation already exists for this email
    """
    role_value = Role(role).value

    existing = db.query(Invitation).filter(Invitation.email == email).first()
    if existing:
        raise ValueError("An invitation already exists for this email")

    invitation = Invitation(email=email, agency_id=agency_id, role=role_value)
    db.add(invitation)
    db.flush()

    try:
        identity.create_invitation(
            email=email,
            redirect_url=f"{settings.frontend_base_url}{SIGN_UP_PATH}",
            public_metadata={"throughInvitation": True, "role": role_value},
        )
    except Exception:
        db.rollback()
        raise

    db.commit()
    db.refresh(invitation)
    return invitation


def _accept_invitation(
    db: Session,
    identity: IdentityProvider,
    principal: Principal,
    invitation: Invitation,
) -> str | None:
    """
    Materialize the invited user and consume the invitation.

    All local writes commit together after the provider metadata update;
    any failure rolls the whole acceptance back.
    """
    agency_id = invitation.agency_id
    try:
        user = user_service.create_team_user(
            db,
            agency_id,
            {
                "id": principal.id,
                "email": invitation.email,
                "agency_id": agency_id,
                "avatar_url": principal.image_url,
                "name": principal.full_name,
                "role": invitation.role,
            },
        )
        if not user:
            return None

        notification_service.save_activity_logs_notification(
            db,
            principal,
            description="Joined",
            agency_id=agency_id,
        )
        db.delete(invitation)
        db.flush()

        identity.update_user_metadata(
            principal.id,
            {"role": user.role or DEFAULT_ROLE.value},
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "Invitation acceptance failed",
            extra=build_log_context(user_id=principal.id, agency_id=agency_id),
        )
        raise

    logger.info(
        "Invitation accepted",
        extra=build_log_context(user_id=principal.id, agency_id=agency_id),
    )
    return agency_id


def verify_and_accept_invitation(
    db: Session,
    identity: IdentityProvider,
    principal: Principal | None,
) -> str | None:
    """
    Resolve which agency the signed-in principal belongs to.

    Flow:
    1. Require a principal (AuthenticationRequired otherwise)
    2. If a PENDING invitation exists for the principal's email, accept it
       and return its agency id (None for owner-role invitations)
    3. Otherwise return the existing user's agency id, or None
    """
    if principal is None:
        raise AuthenticationRequired()

    invitation = get_pending_invitation(db, principal.email)
    if invitation:
        return _accept_invitation(db, identity, principal, invitation)

    user = user_service.get_user_by_email(db, principal.email)
    return user.agency_id if user else None
