"""Shared fixtures: a Listmonk client pointed at a fake host and in-memory records."""

import pytest

from app.services.listmonk_client import ListmonkClient
from app.services.notification_service import NotificationService

LISTMONK_URL = "http://listmonk.test"
TX_URL = f"{LISTMONK_URL}/api/tx"


class FakeStudentRecords:
    """Stands in for StudentRecordService."""

    def __init__(self, students=None):
        self.students = students or []
        self.drives_queried = []

    def list_student_emails(self):
        return [s["email"] for s in self.students]

    def get_eligible_students_for_drive(self, drive):
        from app.services.eligibility import filter_eligible
        self.drives_queried.append(drive)
        return filter_eligible(self.students, drive)


@pytest.fixture
def listmonk_client():
    return ListmonkClient(LISTMONK_URL, "admin", "secret")


@pytest.fixture
def student_records():
    return FakeStudentRecords()


@pytest.fixture
def notifier(listmonk_client, student_records):
    return NotificationService(client=listmonk_client, records=student_records)


@pytest.fixture
def drive():
    return {
        "drive_id": 7,
        "company_id": 3,
        "role": "Forensic Analyst",
        "ctc": "8 LPA",
        "deadline": "2026-11-30",
        "eligible_branches": ["Cyber Security"],
        "eligible_years": [2026],
        "min_cgpa": 7.0,
        "max_backlogs": 0,
    }


@pytest.fixture
def company():
    return {
        "company_id": 3,
        "user_id": 12,
        "company_name": "Acme Labs",
        "hr_name": "Priya",
        "hr_email": "hr@acme.x.edu",
    }
