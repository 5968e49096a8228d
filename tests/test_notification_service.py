import json

import pytest
import responses

from app.schemas.schemas import Recipient
from app.services.notification_service import DispatchInProgressError, dispatch_slot
from tests.conftest import TX_URL


def _accept_only(*accepted):
    def callback(request):
        email = json.loads(request.body)["subscriber_email"]
        if email in accepted:
            return 200, {}, json.dumps({"data": True})
        return 400, {}, "rejected"
    return callback


@responses.activate
def test_bulk_welcome_counts_partial_success(notifier):
    responses.add_callback(responses.POST, TX_URL, callback=_accept_only("a@x.edu"))

    result = notifier.send_bulk_student_welcome_emails(
        [Recipient(email="a@x.edu"), Recipient(email="b@x.edu")]
    )

    assert result.success_count == 1
    assert result.total_count == 2
    assert result.failed_count == 1
    assert result.success is True


@responses.activate
def test_bulk_notification_does_not_stop_on_failure(notifier):
    responses.add_callback(responses.POST, TX_URL, callback=_accept_only("c@x.edu"))

    result = notifier.send_bulk_notification(
        ["a@x.edu", "b@x.edu", "c@x.edu"], "Update", "Drive tomorrow"
    )

    assert len(responses.calls) == 3
    assert result.success_count == 1
    assert result.total_count == 3


@responses.activate
def test_duplicate_addresses_are_each_sent(notifier):
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    result = notifier.send_bulk_notification(["a@x.edu"] * 3, "Update", "Body")

    assert len(responses.calls) == 3
    assert result.success_count == 3
    assert result.total_count == 3


@responses.activate
def test_empty_list_makes_no_calls(notifier):
    result = notifier.send_bulk_notification([], "Update", "Body")

    assert len(responses.calls) == 0
    assert result.success_count == 0
    assert result.total_count == 0
    assert result.success is True


@responses.activate
def test_all_failures_is_not_success(notifier):
    responses.add(responses.POST, TX_URL, body="down", status=503)

    result = notifier.send_bulk_notification(["a@x.edu", "b@x.edu"], "Update", "Body")

    assert result.success_count == 0
    assert result.total_count == 2
    assert result.success is False


@responses.activate
def test_broadcast_body_is_wrapped_in_pre_wrap_div(notifier):
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    notifier.send_bulk_notification(["a@x.edu"], "Update", "Line 1\nLine 2")

    body = json.loads(responses.calls[0].request.body)["body"]
    assert body.startswith('<div style="white-space: pre-wrap; font-family: monospace;">')
    assert "Line 1\nLine 2" in body


@responses.activate
def test_welcome_email_includes_credentials(notifier):
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    result = notifier.send_student_welcome_email(
        Recipient(email="a@x.edu", name="Asha", roll_no="NFSU-042", password="s3cret-pass")
    )

    assert result.success is True
    payload = json.loads(responses.calls[0].request.body)
    assert payload["subscriber_email"] == "a@x.edu"
    assert "Dear Asha" in payload["body"]
    assert "NFSU-042" in payload["body"]
    assert "s3cret-pass" in payload["body"]


@responses.activate
def test_welcome_email_failure_is_returned_not_raised(notifier):
    responses.add(responses.POST, TX_URL, body="invalid email", status=400)

    result = notifier.send_student_welcome_email(Recipient(email="a@x.edu"))

    assert result.success is False
    assert result.error == "invalid email"


@responses.activate
def test_company_approval_goes_to_hr(notifier, company):
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    result = notifier.send_company_approval_email(company)

    assert result.success is True
    payload = json.loads(responses.calls[0].request.body)
    assert payload["subscriber_email"] == "hr@acme.x.edu"
    assert "Acme Labs" in payload["body"]
    assert payload["subject"].startswith("✅ Company Approved")


@responses.activate
def test_notify_eligible_students_only_mails_matches(notifier, student_records, drive, company):
    student_records.students = [
        {"email": "ok@x.edu", "branch": "Cyber Security", "year": 2026, "cgpa": 8.1, "backlogs": 0},
        {"email": "lowcgpa@x.edu", "branch": "Cyber Security", "year": 2026, "cgpa": 6.0, "backlogs": 0},
        {"email": "other@x.edu", "branch": "Chemistry", "year": 2026, "cgpa": 9.0, "backlogs": 0},
    ]
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    result = notifier.notify_eligible_students(drive, company)

    assert student_records.drives_queried == [drive]
    assert result.success_count == 1
    assert result.total_count == 1
    payload = json.loads(responses.calls[0].request.body)
    assert payload["subscriber_email"] == "ok@x.edu"
    assert payload["subject"] == "🚀 Placement Drive: Forensic Analyst at Acme Labs"


@responses.activate
def test_notify_with_no_eligible_students_sends_nothing(notifier, drive, company):
    result = notifier.notify_eligible_students(drive, company)

    assert len(responses.calls) == 0
    assert result.total_count == 0
    assert result.success_count == 0


def test_second_bulk_dispatch_is_rejected_while_one_runs(notifier):
    with dispatch_slot():
        with pytest.raises(DispatchInProgressError):
            notifier.send_bulk_notification(["a@x.edu"], "Update", "Body")


@responses.activate
def test_dispatch_slot_is_released_after_run(notifier):
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    notifier.send_bulk_notification(["a@x.edu"], "Update", "Body")
    result = notifier.send_bulk_notification(["b@x.edu"], "Update", "Body")

    assert result.success_count == 1
