"""Tests for structured logging helpers."""

import logging

from agencyhub.core.structured_logging import build_log_context, configure_logging


def test_build_log_context_includes_only_provided_fields():
    context = build_log_context(
        user_id="user-1",
        agency_id="agency-1",
        subaccount_id="sub-1",
        request_id="req-1",
        route="/agency",
    )

    assert context == {
        "user_id": "user-1",
        "agency_id": "agency-1",
        "subaccount_id": "sub-1",
        "request_id": "req-1",
        "route": "/agency",
    }


def test_build_log_context_ignores_empty_fields():
    context = build_log_context(
        user_id="",
        agency_id=None,
        request_id="req-1",
    )

    assert context == {"request_id": "req-1"}


def test_activity_log_records_ids_only(db, owner_user, test_agency, owner_principal, caplog):
    """Service logs carry ids in extra, never names or emails."""
    from agencyhub.services import notification_service

    with caplog.at_level(logging.INFO, logger="agencyhub.services.notification_service"):
        notification_service.save_activity_logs_notification(
            db, owner_principal, "Updated", agency_id=test_agency.id
        )

    record = next(r for r in caplog.records if r.getMessage() == "Activity logged")
    assert record.user_id == owner_user.id
    assert record.agency_id == test_agency.id
    assert owner_principal.email not in record.getMessage()


def test_configure_logging_is_idempotent():
    configure_logging("debug")
    configure_logging()
