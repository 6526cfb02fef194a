"""User endpoints for the signed-in principal."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from agencyhub.core.deps import get_db, get_identity_provider, require_principal
from agencyhub.schemas.user import AuthUserDetails, UserInit, UserRead
from agencyhub.services import user_service
from agencyhub.services.identity_service import IdentityProvider, Principal


router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_principal)],
)


@router.post("/init", response_model=UserRead)
def init_user(
    body: UserInit,
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
    principal: Principal = Depends(require_principal),
):
    """Create or update the local row for the signed-in identity."""
    updates = body.model_dump(exclude_unset=True, exclude={"role"})
    return user_service.init_user(db, identity, principal, role=body.role, **updates)


@router.get("/me", response_model=AuthUserDetails)
def get_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
):
    """Signed-in user with agency navigation and permissions."""
    user = user_service.get_auth_user_details(db, principal)
    if not user:
        raise HTTPException(status_code=404, detail="User not initialised")
    return user
