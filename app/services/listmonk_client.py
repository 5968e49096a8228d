"""
Listmonk API Client

Listmonk is a free, self-hosted mailing service. We only use its
transactional endpoint (POST /api/tx): one request = one recipient.

Failures never raise out of this module. A non-2xx response or a network
error comes back as a failed SendResult so that bulk loops can count it
and move on to the next recipient.
"""

import logging
from typing import Optional

import requests
from requests.auth import HTTPBasicAuth

from app.core.config import get_settings
from app.schemas.schemas import NotificationRequest, SendResult

logger = logging.getLogger(__name__)

TX_ENDPOINT = "/api/tx"


class ListmonkClient:
    """
    Thin wrapper around Listmonk's transactional mail API.
    Credentials are sent as HTTP Basic auth on every request.
    No Session is kept: the singleton is shared by request threads.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth = HTTPBasicAuth(username, password)
        self.timeout = timeout

    @property
    def tx_url(self) -> str:
        return f"{self.base_url}{TX_ENDPOINT}"

    def send(self, request: NotificationRequest) -> SendResult:
        """POST a single transactional email."""
        logger.info("[Listmonk] Sending transactional email to %s", request.recipient_email)
        try:
            response = requests.post(
                self.tx_url,
                json=request.to_payload(),
                auth=self.auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("[Listmonk] Transport error for %s: %s", request.recipient_email, e)
            return SendResult.failed(str(e))

        if not response.ok:
            detail = response.text or "Failed to send transactional email"
            logger.error(
                "[Listmonk] %s rejected (HTTP %s): %s",
                request.recipient_email, response.status_code, detail
            )
            return SendResult.failed(detail, status_code=response.status_code)

        return SendResult.ok(status_code=response.status_code)

    def send_transactional_email(
        self,
        recipient_email: str,
        subject: str,
        html_body: str,
        template_id: Optional[int] = None,
    ) -> SendResult:
        """Convenience wrapper: build the request and send it."""
        request = NotificationRequest(
            recipient_email=recipient_email,
            subject=subject,
            html_body=html_body,
            template_id=template_id,
        )
        return self.send(request)

    def test_connection(self) -> bool:
        """Check Listmonk is reachable and the credentials are accepted."""
        try:
            response = requests.get(
                f"{self.base_url}/api/health", auth=self.auth, timeout=self.timeout or 10
            )
            return response.ok
        except requests.RequestException as e:
            logger.warning("Listmonk connection failed: %s", e)
            return False


# Singleton instance
_listmonk_client: ListmonkClient = None


def get_listmonk_client() -> ListmonkClient:
    """Get or create the Listmonk client (singleton pattern)"""
    global _listmonk_client
    if _listmonk_client is None:
        settings = get_settings()
        _listmonk_client = ListmonkClient(
            base_url=settings.listmonk_url,
            username=settings.listmonk_username,
            password=settings.listmonk_password,
            timeout=settings.listmonk_timeout,
        )
    return _listmonk_client
