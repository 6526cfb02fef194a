"""User service - local user rows mirroring external identities."""

import logging
from typing import Any

from sqlalchemy.orm import Session, selectinload

from agencyhub.db.enums import DEFAULT_ROLE, Role
from agencyhub.db.models import Agency, SubAccount, User
from agencyhub.services.identity_service import IdentityProvider, Principal


logger = logging.getLogger(__name__)

# Columns callers may set through init_user / create_team_user
USER_FIELDS = {"id", "name", "avatar_url", "email", "role", "agency_id"}


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get user by email (the lookup key shared with the identity provider)."""
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: str) -> User | None:
    """Get user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_auth_user_details(db: Session, principal: Principal | None) -> User | None:
    """
    Get the signed-in user's row with agency navigation and permissions loaded.

    Returns None if unauthenticated or the user has not been initialised yet.
    """
    if principal is None:
        return None

    return (
        db.query(User)
        .options(
            selectinload(User.agency).selectinload(Agency.sidebar_options),
            selectinload(User.agency)
            .selectinload(Agency.sub_accounts)
            .selectinload(SubAccount.sidebar_options),
            selectinload(User.permissions),
        )
        .filter(User.email == principal.email)
        .first()
    )


def init_user(
    db: Session,
    identity: IdentityProvider,
    principal: Principal | None,
    role: Role | str | None = None,
    **updates: Any,
) -> User | None:
    """
    Upsert the signed-in user's row and mirror the role to the provider.

    Update applies the given fields; create uses the principal's profile.
    Returns None if unauthenticated.
    """
    if principal is None:
        return None

    resolved_role = Role(role).value if role else DEFAULT_ROLE.value
    changes = {k: v for k, v in updates.items() if k in USER_FIELDS}
    if role:
        changes["role"] = resolved_role

    user = get_user_by_email(db, principal.email)
    if user:
        for key, value in changes.items():
            setattr(user, key, value)
    else:
        user = User(
            id=principal.id,
            avatar_url=principal.image_url,
            email=principal.email,
            name=principal.full_name,
            role=resolved_role,
        )
        db.add(user)

    db.commit()
    db.refresh(user)

    identity.update_user_metadata(principal.id, {"role": resolved_role})
    return user


def create_team_user(db: Session, agency_id: str, user_data: dict[str, Any]) -> User | None:
    """
    Insert a team member row for an agency.

    Owners are never created this way (they come from init_user); returns None.
    Flushes only; the caller commits.
    """
    if user_data.get("role") == Role.AGENCY_OWNER.value:
        return None

    fields = {k: v for k, v in user_data.items() if k in USER_FIELDS}
    fields.setdefault("agency_id", agency_id)
    if fields.get("role"):
        fields["role"] = Role(fields["role"]).value
    user = User(**fields)
    db.add(user)
    db.flush()
    return user
