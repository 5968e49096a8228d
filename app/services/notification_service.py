"""
Notification Service - fans emails out through Listmonk.

Three shapes of send:
1. Transactional: one recipient, result returned directly
   (welcome email, company approval).
2. Bulk over an explicit list: mail bot broadcast, bulk welcome.
3. Bulk over an eligibility set: students matching a drive.

Bulk sends are SEQUENTIAL and BEST-EFFORT:
- one Listmonk call per address, in list order
- a failed send is counted and the loop carries on
- duplicates are NOT removed, each one is sent
- nothing is retried

Only one bulk dispatch runs per process at a time (see dispatch_slot).
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterable, List, Optional

from app.schemas.schemas import DispatchResult, Recipient, SendResult
from app.services import email_templates
from app.services.listmonk_client import ListmonkClient, get_listmonk_client

logger = logging.getLogger(__name__)


class DispatchInProgressError(Exception):
    """Raised when a bulk dispatch is requested while another one is running."""


_dispatch_lock = threading.Lock()


@contextmanager
def dispatch_slot():
    """Busy flag for bulk sends. Does not wait: a second caller fails fast."""
    if not _dispatch_lock.acquire(blocking=False):
        raise DispatchInProgressError("Another bulk dispatch is already running")
    try:
        yield
    finally:
        _dispatch_lock.release()


class NotificationService:
    """
    Builds subject/body pairs and drives the Listmonk client.

    `records` only needs get_eligible_students_for_drive(drive) -> list of
    student dicts; it is resolved lazily so this class can be used
    without a database.
    """

    def __init__(self, client: Optional[ListmonkClient] = None, records=None):
        self.client = client or get_listmonk_client()
        self._records = records

    @property
    def records(self):
        if self._records is None:
            from app.services.record_service import StudentRecordService
            self._records = StudentRecordService()
        return self._records

    # --------------------------------------------------------
    # Core fan-out loop
    # --------------------------------------------------------

    def _fan_out(self, emails: Iterable[str], subject: str, html_body: str) -> DispatchResult:
        result = DispatchResult()
        with dispatch_slot():
            for email in emails:
                result.total_count += 1
                if self.client.send_transactional_email(email, subject, html_body).success:
                    result.success_count += 1
        logger.info(
            "Dispatch '%s': %d/%d delivered", subject, result.success_count, result.total_count
        )
        return result

    # --------------------------------------------------------
    # Transactional
    # --------------------------------------------------------

    def send_student_welcome_email(self, student: Recipient) -> SendResult:
        subject, body = email_templates.student_welcome(
            student.name, student.email, student.roll_no, student.password
        )
        return self.client.send_transactional_email(student.email, subject, body)

    def send_company_approval_email(self, company: dict) -> SendResult:
        subject, body = email_templates.company_approval(
            company["hr_name"], company["company_name"]
        )
        return self.client.send_transactional_email(company["hr_email"], subject, body)

    # --------------------------------------------------------
    # Bulk
    # --------------------------------------------------------

    def send_bulk_student_welcome_emails(self, students: List[Recipient]) -> DispatchResult:
        """Each body is personalised, so this loop calls the welcome sender per student."""
        result = DispatchResult()
        with dispatch_slot():
            for student in students:
                result.total_count += 1
                if self.send_student_welcome_email(student).success:
                    result.success_count += 1
        logger.info(
            "Bulk welcome: %d/%d delivered", result.success_count, result.total_count
        )
        return result

    def send_bulk_notification(self, recipients: List[str], subject: str, body: str) -> DispatchResult:
        """Mail bot broadcast: same plain-text body to every address."""
        return self._fan_out(recipients, subject, email_templates.broadcast_body(body))

    def notify_eligible_students(self, drive: dict, company: dict) -> DispatchResult:
        eligible = self.records.get_eligible_students_for_drive(drive)
        logger.info(
            "Drive %s: %d eligible students", drive.get("drive_id"), len(eligible)
        )
        subject, body = email_templates.drive_announcement(drive, company["company_name"])
        return self._fan_out((s["email"] for s in eligible), subject, body)


def get_notification_service() -> NotificationService:
    """FastAPI dependency."""
    return NotificationService()
