"""
Test configuration and fixtures.

Provides:
- In-memory SQLite session (schema created and dropped per test)
- FakeIdentityProvider recording calls to the external auth service
- HTTPX AsyncClient with dependency overrides
"""
import os
import uuid
from typing import Any, AsyncGenerator, Generator

# Must be set before the app (and its settings/limiter) is imported
os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FRONTEND_URL"] = "http://frontend.test"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from agencyhub.main import app
from agencyhub.core.deps import get_current_principal, get_db, get_identity_provider
from agencyhub.core.rate_limit import limiter
from agencyhub.db.base import Base
from agencyhub.db.enums import Role
from agencyhub.db.models import Agency, SubAccount, User
from agencyhub.services.identity_service import Principal


# =============================================================================
# Database Fixtures
# =============================================================================

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test.

    App code commits freely; tables are dropped afterwards.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Rate limit counters are per process; start every test from zero."""
    limiter.reset()
    yield


# =============================================================================
# Identity Fixtures
# =============================================================================

class FakeIdentityProvider:
    """In-memory IdentityProvider that records every outbound call."""

    def __init__(self, users: dict[str, Principal] | None = None):
        self.users = users or {}
        self.metadata_updates: list[tuple[str, dict[str, Any]]] = []
        self.invitations: list[dict[str, Any]] = []
        self.fail_metadata = False
        self.fail_invitations = False

    def get_user(self, user_id: str) -> Principal | None:
        return self.users.get(user_id)

    def update_user_metadata(self, user_id: str, private_metadata: dict[str, Any]) -> None:
        if self.fail_metadata:
            raise RuntimeError("identity provider unavailable")
        self.metadata_updates.append((user_id, private_metadata))

    def create_invitation(
        self,
        email: str,
        redirect_url: str,
        public_metadata: dict[str, Any],
    ) -> None:
        if self.fail_invitations:
            raise RuntimeError("identity provider unavailable")
        self.invitations.append(
            {
                "email": email,
                "redirect_url": redirect_url,
                "public_metadata": public_metadata,
            }
        )


@pytest.fixture(scope="function")
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture(scope="function")
def owner_principal() -> Principal:
    """Signed-in principal for the agency owner."""
    return Principal(
        id=f"user_{uuid.uuid4().hex[:12]}",
        email="owner@agency.test",
        first_name="Olive",
        last_name="Owner",
        image_url="https://img.test/owner.png",
    )


@pytest.fixture(scope="function")
def invitee_principal() -> Principal:
    """Signed-in principal with no local user row yet."""
    return Principal(
        id=f"user_{uuid.uuid4().hex[:12]}",
        email="invitee@agency.test",
        first_name="Ivan",
        last_name="Invitee",
        image_url="",
    )


# =============================================================================
# Tenant Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def test_agency(db: Session) -> Agency:
    """Create a bare agency (no seeded navigation)."""
    agency = Agency(
        id=str(uuid.uuid4()),
        name="Test Agency",
        company_email="owner@agency.test",
    )
    db.add(agency)
    db.commit()
    return agency


@pytest.fixture(scope="function")
def owner_user(db: Session, test_agency: Agency, owner_principal: Principal) -> User:
    """Create the agency owner's user row."""
    user = User(
        id=owner_principal.id,
        name=owner_principal.full_name,
        email=owner_principal.email,
        avatar_url=owner_principal.image_url,
        role=Role.AGENCY_OWNER.value,
        agency_id=test_agency.id,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def test_subaccount(db: Session, test_agency: Agency) -> SubAccount:
    sub_account = SubAccount(
        id=str(uuid.uuid4()),
        name="Test Sub Account",
        company_email="sub@agency.test",
        agency_id=test_agency.id,
    )
    db.add(sub_account)
    db.commit()
    return sub_account


# =============================================================================
# Client Fixtures
# =============================================================================

def _override_db(db: Session):
    def override_get_db():
        yield db
    return override_get_db


@pytest.fixture(scope="function")
async def client(
    db: Session,
    identity: FakeIdentityProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient (no session cookie).
    """
    app.dependency_overrides[get_db] = _override_db(db)
    app.dependency_overrides[get_identity_provider] = lambda: identity

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(
    db: Session,
    identity: FakeIdentityProvider,
    owner_principal: Principal,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create AsyncClient signed in as owner_principal.
    """
    app.dependency_overrides[get_db] = _override_db(db)
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_current_principal] = lambda: owner_principal

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()
