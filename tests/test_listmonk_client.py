import base64
import json
from unittest.mock import Mock, patch

import pytest
import requests
import responses
from pydantic import ValidationError

from app.schemas.schemas import NotificationRequest
from tests.conftest import TX_URL


@responses.activate
def test_send_posts_tx_payload_with_basic_auth(listmonk_client):
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    result = listmonk_client.send_transactional_email("a@x.edu", "Hello", "<p>Hi</p>")

    assert result.success is True
    assert result.error is None
    assert len(responses.calls) == 1

    sent = responses.calls[0].request
    assert json.loads(sent.body) == {
        "subscriber_email": "a@x.edu",
        "subject": "Hello",
        "body": "<p>Hi</p>",
        "content_type": "html",
    }
    expected = "Basic " + base64.b64encode(b"admin:secret").decode()
    assert sent.headers["Authorization"] == expected


@responses.activate
def test_template_id_is_sent_when_given(listmonk_client):
    responses.add(responses.POST, TX_URL, json={"data": True}, status=200)

    listmonk_client.send_transactional_email("a@x.edu", "Hello", "<p>Hi</p>", template_id=4)

    assert json.loads(responses.calls[0].request.body)["template_id"] == 4


@responses.activate
def test_non_2xx_returns_failure_with_response_body(listmonk_client):
    responses.add(responses.POST, TX_URL, body="subscriber not found", status=400)

    result = listmonk_client.send_transactional_email("b@x.edu", "Hello", "<p>Hi</p>")

    assert result.success is False
    assert result.error == "subscriber not found"
    assert result.status_code == 400


@responses.activate
def test_non_2xx_with_empty_body_uses_generic_detail(listmonk_client):
    responses.add(responses.POST, TX_URL, body="", status=500)

    result = listmonk_client.send_transactional_email("b@x.edu", "Hello", "<p>Hi</p>")

    assert result.success is False
    assert result.error == "Failed to send transactional email"


@responses.activate
def test_transport_error_returns_failure(listmonk_client):
    responses.add(responses.POST, TX_URL, body=requests.ConnectionError("connection refused"))

    result = listmonk_client.send_transactional_email("a@x.edu", "Hello", "<p>Hi</p>")

    assert result.success is False
    assert "connection refused" in result.error
    assert result.status_code is None


def test_notification_request_is_immutable():
    request = NotificationRequest(recipient_email="a@x.edu", subject="s", html_body="b")
    with pytest.raises(ValidationError):
        request.subject = "changed"
    assert request.subject == "s"
    assert "template_id" not in request.to_payload()


def test_trailing_slash_in_base_url_is_ignored():
    from app.services.listmonk_client import ListmonkClient

    client = ListmonkClient("http://listmonk.test/", "admin", "secret")
    assert client.tx_url == "http://listmonk.test/api/tx"


def test_each_send_is_an_independent_request(listmonk_client):
    with patch("app.services.listmonk_client.requests.post") as post:
        post.return_value = Mock(ok=True, status_code=200)

        listmonk_client.send_transactional_email("a@x.edu", "Hello", "<p>Hi</p>")
        listmonk_client.send_transactional_email("b@x.edu", "Hello", "<p>Hi</p>")

    assert post.call_count == 2
    assert [c.kwargs["json"]["subscriber_email"] for c in post.call_args_list] == ["a@x.edu", "b@x.edu"]
    assert all(c.args[0] == "http://listmonk.test/api/tx" for c in post.call_args_list)
