"""Tests for sub-account upsert with seeded records."""

from agencyhub.db.models import (
    Permission,
    Pipeline,
    SubAccount,
    SubAccountSidebarOption,
)
from agencyhub.schemas.subaccount import SubAccountUpsert
from agencyhub.services import subaccount_service


def test_create_seeds_permission_pipeline_and_navigation(db, owner_user, test_agency):
    payload = SubAccountUpsert(
        agency_id=test_agency.id,
        name="Downtown",
        company_email="downtown@agency.test",
    )

    sub_account = subaccount_service.upsert_subaccount(db, payload)

    assert sub_account is not None
    assert sub_account.id == payload.id

    permission = db.query(Permission).one()
    assert permission.email == owner_user.email
    assert permission.sub_account_id == sub_account.id
    assert permission.access is True

    pipeline = db.query(Pipeline).one()
    assert pipeline.name == "Lead Cycle"
    assert pipeline.sub_account_id == sub_account.id

    options = db.query(SubAccountSidebarOption).all()
    assert len(options) == 8
    links = {o.name: o.link for o in options}
    assert links["Dashboard"] == f"/subaccount/{sub_account.id}"
    assert links["Contacts"] == f"/subaccount/{sub_account.id}/contacts"


def test_missing_company_email_writes_nothing(db, owner_user, test_agency):
    result = subaccount_service.upsert_subaccount(
        db, SubAccountUpsert(agency_id=test_agency.id, name="No Email")
    )

    assert result is None
    assert db.query(SubAccount).count() == 0


def test_agency_without_owner_writes_nothing(db, test_agency):
    """No owner: logged and rejected before any row is written."""
    result = subaccount_service.upsert_subaccount(
        db,
        SubAccountUpsert(
            agency_id=test_agency.id,
            name="Ownerless",
            company_email="x@agency.test",
        ),
    )

    assert result is None
    assert db.query(SubAccount).count() == 0
    assert db.query(Permission).count() == 0
    assert db.query(Pipeline).count() == 0
    assert db.query(SubAccountSidebarOption).count() == 0


def test_update_existing_does_not_reseed(db, owner_user, test_agency):
    created = subaccount_service.upsert_subaccount(
        db,
        SubAccountUpsert(agency_id=test_agency.id, name="Downtown", company_email="d@agency.test"),
    )
    created_id = created.id

    updated = subaccount_service.upsert_subaccount(
        db,
        SubAccountUpsert(
            id=created_id,
            agency_id=test_agency.id,
            name="Uptown",
            company_email="d@agency.test",
        ),
    )

    assert updated.id == created_id
    assert updated.name == "Uptown"
    assert db.query(Pipeline).count() == 1
    assert db.query(Permission).count() == 1
    assert db.query(SubAccountSidebarOption).count() == 8


def test_get_details_and_delete(db, owner_user, test_agency):
    created = subaccount_service.upsert_subaccount(
        db,
        SubAccountUpsert(agency_id=test_agency.id, name="Downtown", company_email="d@agency.test"),
    )
    created_id = created.id

    details = subaccount_service.get_subaccount_details(db, created_id)
    assert [p.name for p in details.pipelines] == ["Lead Cycle"]

    assert subaccount_service.delete_subaccount(db, created_id) is True
    assert db.query(SubAccount).count() == 0
    assert db.query(Pipeline).count() == 0
    assert db.query(SubAccountSidebarOption).count() == 0
    assert db.query(Permission).count() == 0
    assert subaccount_service.delete_subaccount(db, created_id) is False


def test_database_failure_is_logged_and_swallowed(db, owner_user, test_agency, monkeypatch, caplog):
    """A failing commit rolls back and returns None like agency upsert."""
    from sqlalchemy.exc import OperationalError

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", failing_commit)

    result = subaccount_service.upsert_subaccount(
        db,
        SubAccountUpsert(agency_id=test_agency.id, name="Downtown", company_email="d@agency.test"),
    )

    assert result is None
    assert "Sub-account upsert failed" in caplog.text
    monkeypatch.undo()
    assert db.query(SubAccount).count() == 0
    assert db.query(Pipeline).count() == 0
