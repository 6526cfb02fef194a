"""Sub-account endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from agencyhub.core.deps import get_db, require_principal
from agencyhub.core.rate_limit import api_rate_limit, limiter, rate_limit_disabled
from agencyhub.schemas.subaccount import SubAccountRead, SubAccountUpsert
from agencyhub.services import notification_service, subaccount_service
from agencyhub.services.identity_service import Principal


router = APIRouter(
    prefix="/subaccounts",
    tags=["subaccounts"],
    dependencies=[Depends(require_principal)],
)


@router.post("", response_model=SubAccountRead)
@limiter.limit(api_rate_limit, exempt_when=rate_limit_disabled)
def upsert_subaccount(
    request: Request,
    body: SubAccountUpsert,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
):
    """Create or update a sub-account under an agency."""
    # Actor must exist before the upsert commits
    try:
        notification_service.get_acting_user(db, principal)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    sub_account = subaccount_service.upsert_subaccount(db, body)
    if not sub_account:
        raise HTTPException(status_code=400, detail="Could not save sub account")

    try:
        notification_service.save_activity_logs_notification(
            db,
            principal,
            description=f"Updated sub account | {sub_account.name}",
            subaccount_id=sub_account.id,
        )
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()

    return subaccount_service.get_subaccount_details(db, sub_account.id)


@router.get("/{sub_account_id}", response_model=SubAccountRead)
def get_subaccount(
    sub_account_id: str,
    db: Session = Depends(get_db),
):
    sub_account = subaccount_service.get_subaccount_details(db, sub_account_id)
    if not sub_account:
        raise HTTPException(status_code=404, detail="Sub account not found")
    return sub_account


@router.delete("/{sub_account_id}")
def delete_subaccount(
    sub_account_id: str,
    db: Session = Depends(get_db),
):
    if not subaccount_service.delete_subaccount(db, sub_account_id):
        raise HTTPException(status_code=404, detail="Sub account not found")
    return {"deleted": True}
