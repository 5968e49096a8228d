"""
Mail Bot - draft with AI, review, broadcast.

Flow (driven by the admin UI):
1. draft()  -> AI writes an email from raw company text
2. operator edits / approves the text
3. send()   -> subject pulled from the first line, body broadcast
"""

import logging
from typing import List, Optional

from app.schemas.schemas import DispatchResult, DraftResponse
from app.services.draft_generator import (
    DraftGenerationError, DraftGenerator, EMPTY_DRAFT_MESSAGE, get_draft_generator
)
from app.services.notification_service import NotificationService, get_notification_service

logger = logging.getLogger(__name__)

DRAFT_ERROR_MESSAGE = "Error: Ensure the AI API key is set and valid."


def extract_subject(draft: str, company_name: str, role: str) -> str:
    """First line 'Subject: ...' wins (markdown bold stripped), otherwise a generic subject."""
    first_line = draft.split("\n", 1)[0]
    if "subject:" in first_line.lower():
        idx = first_line.lower().index("subject:")
        subject = first_line[idx + len("subject:"):].strip("* \t\r")
        if subject:
            return subject
    return f"Placement Update: {company_name} - {role}"


class MailBotService:

    def __init__(
        self,
        generator: Optional[DraftGenerator] = None,
        notifier: Optional[NotificationService] = None,
        records=None,
    ):
        self.generator = generator or get_draft_generator()
        self.notifier = notifier or get_notification_service()
        self._records = records

    @property
    def records(self):
        if self._records is None:
            from app.services.record_service import StudentRecordService
            self._records = StudentRecordService()
        return self._records

    def draft(self, company_name: str, role: str, raw_context: str) -> DraftResponse:
        try:
            text = self.generator.generate_email_draft(company_name, role, raw_context)
        except DraftGenerationError:
            return DraftResponse(draft=DRAFT_ERROR_MESSAGE, generated=False)
        return DraftResponse(draft=text, generated=text != EMPTY_DRAFT_MESSAGE)

    def send(
        self,
        company_name: str,
        role: str,
        draft: str,
        recipients: Optional[List[str]] = None,
    ) -> DispatchResult:
        if recipients is None:
            recipients = self.records.list_student_emails()
        subject = extract_subject(draft, company_name, role)
        logger.info("Mail bot broadcast '%s' to %d recipients", subject, len(recipients))
        return self.notifier.send_bulk_notification(recipients, subject, draft)


def get_mailbot_service() -> MailBotService:
    """FastAPI dependency."""
    return MailBotService()
