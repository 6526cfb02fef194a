"""Tests for agency upsert, update and delete."""

import uuid

from agencyhub.db.enums import Role
from agencyhub.db.models import Agency, AgencySidebarOption, Notification, SubAccount, User
from agencyhub.schemas.agency import AgencyUpsert
from agencyhub.services import agency_service


def _owner(db, email="founder@agency.test"):
    user = User(
        id=f"user_{uuid.uuid4().hex[:12]}",
        name="Fay Founder",
        email=email,
        role=Role.AGENCY_OWNER.value,
    )
    db.add(user)
    db.commit()
    return user


def test_create_agency_seeds_six_sidebar_options(db):
    """New agencies get the fixed navigation and are connected to their owner."""
    owner = _owner(db)
    payload = AgencyUpsert(name="Acme", company_email=owner.email)

    agency = agency_service.upsert_agency(db, payload)

    assert agency is not None
    assert agency.id == payload.id
    options = db.query(AgencySidebarOption).filter(
        AgencySidebarOption.agency_id == agency.id
    ).all()
    assert sorted(o.name for o in options) == sorted(
        ["Dashboard", "Launchpad", "Billing", "Settings", "Sub Accounts", "Team"]
    )
    links = {o.name: o.link for o in options}
    assert links["Dashboard"] == f"/agency/{agency.id}"
    assert links["Sub Accounts"] == f"/agency/{agency.id}/all-subaccounts"

    db.refresh(owner)
    assert owner.agency_id == agency.id


def test_upsert_without_company_email_writes_nothing(db):
    result = agency_service.upsert_agency(db, AgencyUpsert(name="No Email"))

    assert result is None
    assert db.query(Agency).count() == 0


def test_upsert_without_owner_user_is_swallowed(db):
    """A missing owner row is logged and returns None instead of raising."""
    result = agency_service.upsert_agency(
        db, AgencyUpsert(name="Orphan", company_email="nobody@agency.test")
    )

    assert result is None
    assert db.query(Agency).count() == 0
    assert db.query(AgencySidebarOption).count() == 0


def test_upsert_existing_agency_updates_fields_only(db):
    """Updating does not reseed navigation."""
    owner = _owner(db)
    created = agency_service.upsert_agency(db, AgencyUpsert(name="Acme", company_email=owner.email))

    updated = agency_service.upsert_agency(
        db,
        AgencyUpsert(id=created.id, name="Acme Renamed", company_email=owner.email, city="Austin"),
    )

    assert updated.id == created.id
    assert updated.name == "Acme Renamed"
    assert updated.city == "Austin"
    assert db.query(AgencySidebarOption).count() == len(agency_service.AGENCY_SIDEBAR_OPTIONS)


def test_update_agency_details_ignores_id(db, test_agency):
    agency = agency_service.update_agency_details(
        db, test_agency.id, {"id": "other", "goal": 12, "white_label": False}
    )

    assert agency.id == test_agency.id
    assert agency.goal == 12
    assert agency.white_label is False


def test_update_missing_agency_returns_none(db):
    assert agency_service.update_agency_details(db, "missing", {"goal": 1}) is None


def test_delete_agency_cascades_and_detaches_members(db, owner_user, test_agency, test_subaccount):
    db.add(Notification(notification="x | y", agency_id=test_agency.id, user_id=owner_user.id))
    db.commit()

    assert agency_service.delete_agency(db, test_agency.id) is True

    assert db.query(Agency).count() == 0
    assert db.query(SubAccount).count() == 0
    assert db.query(Notification).count() == 0
    member = db.query(User).filter(User.id == owner_user.id).one()
    assert member.agency_id is None


def test_delete_missing_agency(db):
    assert agency_service.delete_agency(db, "missing") is False
