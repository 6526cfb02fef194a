"""FastAPI dependencies for authentication and database access."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from agencyhub.core.config import settings
from agencyhub.core.security import extract_bearer_token
from agencyhub.db.session import SessionLocal
from agencyhub.services.identity_service import (
    AuthenticationRequired,
    ClerkIdentityProvider,
    IdentityProvider,
    Principal,
    resolve_principal,
)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_identity_provider() -> IdentityProvider:
    """External auth collaborator (overridden in tests)."""
    return ClerkIdentityProvider()


def get_session_token(request: Request) -> str | None:
    """Session JWT from the provider cookie, falling back to a bearer header."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    return extract_bearer_token(request.headers.get("authorization"))


def get_current_principal(
    request: Request,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> Principal | None:
    """
    Get the authenticated principal, or None.

    Never raises: callers that need a principal use require_principal.
    """
    return resolve_principal(identity, get_session_token(request))


def require_principal(
    principal: Principal | None = Depends(get_current_principal),
) -> Principal:
    """
    Route protection dependency.

    Raises:
        AuthenticationRequired: Handled app-wide as a redirect to sign-in
    """
    if principal is None:
        raise AuthenticationRequired()
    return principal
