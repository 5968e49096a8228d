import json
from types import SimpleNamespace
from unittest.mock import Mock

import responses

from app.services.draft_generator import DraftGenerationError, DraftGenerator, EMPTY_DRAFT_MESSAGE
from app.services.mailbot_service import DRAFT_ERROR_MESSAGE, MailBotService, extract_subject
from tests.conftest import TX_URL


def test_extract_subject_from_first_line():
    draft = "Subject: Campus Drive - Acme Labs\n\nDear Students,"
    assert extract_subject(draft, "Acme", "Analyst") == "Campus Drive - Acme Labs"


def test_extract_subject_is_case_insensitive():
    assert extract_subject("SUBJECT:  Hiring now", "Acme", "Analyst") == "Hiring now"


def test_extract_subject_falls_back_to_generic():
    assert extract_subject("Dear Students,\n...", "Acme", "Analyst") == "Placement Update: Acme - Analyst"


def test_draft_returns_generated_text():
    generator = Mock()
    generator.generate_email_draft.return_value = "Subject: Hi\nBody"
    mailbot = MailBotService(generator=generator, notifier=Mock(), records=Mock())

    response = mailbot.draft("Acme", "Analyst", "raw")

    assert response.generated is True
    assert response.draft == "Subject: Hi\nBody"


def test_draft_provider_error_yields_fallback_message():
    generator = Mock()
    generator.generate_email_draft.side_effect = DraftGenerationError("no key")
    mailbot = MailBotService(generator=generator, notifier=Mock(), records=Mock())

    response = mailbot.draft("Acme", "Analyst", "raw")

    assert response.generated is False
    assert response.draft == DRAFT_ERROR_MESSAGE


@responses.activate
def test_send_defaults_to_all_students(notifier, student_records):
    student_records.students = [{"email": "a@x.edu"}, {"email": "b@x.edu"}]
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)
    mailbot = MailBotService(generator=Mock(), notifier=notifier, records=student_records)

    result = mailbot.send("Acme", "Analyst", "Subject: Drive on Monday\nDear Students,")

    assert result.success_count == 2
    assert result.total_count == 2
    sent = [json.loads(c.request.body) for c in responses.calls]
    assert [p["subscriber_email"] for p in sent] == ["a@x.edu", "b@x.edu"]
    assert all(p["subject"] == "Drive on Monday" for p in sent)


@responses.activate
def test_send_to_explicit_recipients_ignores_records(notifier):
    records = Mock()
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)
    mailbot = MailBotService(generator=Mock(), notifier=notifier, records=records)

    result = mailbot.send("Acme", "Analyst", "Body", recipients=["z@x.edu"])

    records.list_student_emails.assert_not_called()
    assert result.total_count == 1


def test_extract_subject_strips_markdown_bold():
    draft = "**Subject:** Campus Drive - Acme Labs\n\nDear Students,"
    assert extract_subject(draft, "Acme", "Analyst") == "Campus Drive - Acme Labs"


def test_extract_subject_only_markdown_falls_back():
    assert extract_subject("**Subject:**", "Acme", "Analyst") == "Placement Update: Acme - Analyst"


def test_empty_completion_is_not_a_generated_draft():
    client = Mock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=""))]
    )
    mailbot = MailBotService(
        generator=DraftGenerator(api_key="key", client=client), notifier=Mock(), records=Mock()
    )

    response = mailbot.draft("Acme", "Analyst", "raw")

    assert response.draft == EMPTY_DRAFT_MESSAGE
    assert response.generated is False
