"""
Email Templates - subject/body pairs for every notification we send.

Templates live in app/templates and are named
"{event}.email.{part}.{ext}", e.g. student_welcome.email.subject.txt.
HTML parts are autoescaped; the mail bot broadcast body is operator-reviewed
text and is marked |safe in its template.
"""

import functools
from typing import Optional, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape

from app.core.config import get_settings


@functools.lru_cache()
def get_render_environment() -> Environment:
    return Environment(
        loader=PackageLoader("app", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
    )


def _render(event: str, part: str, ext: str, **data) -> str:
    settings = get_settings()
    context = {
        "institution_name": settings.institution_name,
        "placement_cell_signature": settings.placement_cell_signature,
        "portal_base_url": settings.portal_base_url.rstrip("/"),
    } | data
    template = get_render_environment().get_template(f"{event}.email.{part}.{ext}")
    return template.render(context)


def render_email_parts(event: str, **data) -> Tuple[str, str]:
    """Returns (subject, html_body) for a named event."""
    subject = _render(event, "subject", "txt", **data).strip()
    body = _render(event, "content", "html", **data)
    return subject, body


def student_welcome(
    name: Optional[str],
    email: str,
    roll_no: Optional[str] = None,
    password: Optional[str] = None,
) -> Tuple[str, str]:
    return render_email_parts(
        "student_welcome", name=name, email=email, roll_no=roll_no, password=password
    )


def company_approval(hr_name: str, company_name: str) -> Tuple[str, str]:
    return render_email_parts("company_approval", hr_name=hr_name, company_name=company_name)


def drive_announcement(drive: dict, company_name: str) -> Tuple[str, str]:
    """Same body for every eligible student, so no personal fields."""
    return render_email_parts("drive_announcement", drive=drive, company_name=company_name)


def broadcast_body(text: str) -> str:
    return _render("broadcast", "content", "html", text=text)
