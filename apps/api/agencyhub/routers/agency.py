"""Agency endpoints: landing redirect, upsert, details, activity log, invitations."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from agencyhub.core.config import settings
from agencyhub.core.deps import get_db, get_identity_provider, require_principal
from agencyhub.core.rate_limit import api_rate_limit, limiter, rate_limit_disabled
from agencyhub.schemas.agency import (
    AgencyOnboarding,
    AgencyRead,
    AgencyUpdate,
    AgencyUpsert,
)
from agencyhub.schemas.invitation import InvitationCreate, InvitationRead
from agencyhub.schemas.notification import NotificationListResponse, NotificationRead
from agencyhub.services import (
    agency_service,
    invitation_service,
    notification_service,
    routing_service,
    user_service,
)
from agencyhub.services.identity_service import IdentityProvider, Principal


router = APIRouter(
    prefix="/agency",
    tags=["agency"],
    dependencies=[Depends(require_principal)],
)


def _frontend_url(path: str) -> str:
    """Redirects always target the frontend origin, never user-supplied hosts."""
    return f"{settings.frontend_base_url}{path}"


# =============================================================================
# Landing
# =============================================================================

@router.get("", response_model=AgencyOnboarding)
def agency_landing(
    plan: str | None = Query(None),
    state: str | None = Query(None),
    code: str | None = Query(None),
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
    principal: Principal = Depends(require_principal),
):
    """
    Post sign-in landing.

    1. Accept a pending invitation (or find the user's agency)
    2. Redirect by role when an agency is known
    3. Otherwise return the prefill for the create-agency form
    """
    agency_id = invitation_service.verify_and_accept_invitation(db, identity, principal)
    user = user_service.get_auth_user_details(db, principal)

    if agency_id:
        path = routing_service.resolve_landing_path(
            user.role if user else None,
            agency_id,
            plan=plan,
            state=state,
            code=code,
        )
        if path is None:
            raise HTTPException(status_code=403, detail="Not authorized")
        return RedirectResponse(url=_frontend_url(path), status_code=302)

    return AgencyOnboarding(company_email=principal.email)


# =============================================================================
# Agency CRUD
# =============================================================================

@router.post("", response_model=AgencyRead)
@limiter.limit(api_rate_limit, exempt_when=rate_limit_disabled)
def upsert_agency(
    request: Request,
    body: AgencyUpsert,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
):
    """Create or update an agency (company email required)."""
    if not body.company_email:
        raise HTTPException(status_code=400, detail="Company email is required")

    # Actor must exist before the upsert commits
    try:
        notification_service.get_acting_user(db, principal)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    agency = agency_service.upsert_agency(db, body)
    if not agency:
        raise HTTPException(status_code=400, detail="Could not save agency")

    try:
        notification_service.save_activity_logs_notification(
            db,
            principal,
            description=f"Updated agency details | {agency.name}",
            agency_id=agency.id,
        )
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(agency)
    return agency


@router.patch("/{agency_id}", response_model=AgencyRead)
def update_agency(
    agency_id: str,
    body: AgencyUpdate,
    db: Session = Depends(get_db),
):
    """Partially update agency details."""
    agency = agency_service.update_agency_details(
        db, agency_id, body.model_dump(exclude_unset=True)
    )
    if not agency:
        raise HTTPException(status_code=404, detail="Agency not found")
    return agency


@router.delete("/{agency_id}")
def delete_agency(
    agency_id: str,
    db: Session = Depends(get_db),
):
    """Delete an agency and everything under it."""
    if not agency_service.delete_agency(db, agency_id):
        raise HTTPException(status_code=404, detail="Agency not found")
    return {"deleted": True}


# =============================================================================
# Activity log & team
# =============================================================================

@router.get("/{agency_id}/notifications", response_model=NotificationListResponse)
def list_notifications(
    agency_id: str,
    db: Session = Depends(get_db),
):
    """Agency activity log, newest first."""
    notifications = notification_service.get_notification_and_user(db, agency_id)
    return NotificationListResponse(
        items=[NotificationRead.model_validate(n) for n in notifications]
    )


@router.post("/{agency_id}/invitations", response_model=InvitationRead)
@limiter.limit(api_rate_limit, exempt_when=rate_limit_disabled)
def send_invitation(
    request: Request,
    agency_id: str,
    body: InvitationCreate,
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
    principal: Principal = Depends(require_principal),
):
    """Invite a team member to the agency."""
    if not agency_service.get_agency(db, agency_id):
        raise HTTPException(status_code=404, detail="Agency not found")

    try:
        # Actor must exist before the invitation is committed and emailed
        notification_service.get_acting_user(db, principal)
        invitation = invitation_service.send_invitation(
            db, identity, agency_id, body.email, body.role
        )
        notification_service.save_activity_logs_notification(
            db,
            principal,
            description=f"Invited {body.email}",
            agency_id=agency_id,
        )
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    db.refresh(invitation)
    return invitation
