"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity,
plus the small value objects the notification services pass around.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from typing import Optional, List
from datetime import datetime, date
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    company = "company"
    admin = "admin"


class DriveStatus(str, Enum):
    open = "open"
    closed = "closed"


# ============================================================
# NOTIFICATION SCHEMAS
# ============================================================

class Recipient(BaseModel):
    """An address plus the fields used to personalise the email body."""
    email: EmailStr
    name: Optional[str] = None
    roll_no: Optional[str] = None
    password: Optional[str] = None  # only set right after account creation


class NotificationRequest(BaseModel):
    """One transactional email for one recipient. Immutable."""
    model_config = ConfigDict(frozen=True)

    recipient_email: str
    subject: str
    html_body: str
    template_id: Optional[int] = None

    def to_payload(self) -> dict:
        """Listmonk /api/tx JSON body."""
        payload = {
            "subscriber_email": self.recipient_email,
            "subject": self.subject,
            "body": self.html_body,
            "content_type": "html",
        }
        if self.template_id:
            payload["template_id"] = self.template_id
        return payload


class SendResult(BaseModel):
    success: bool
    error: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def ok(cls, status_code: Optional[int] = None) -> "SendResult":
        return cls(success=True, status_code=status_code)

    @classmethod
    def failed(cls, error: str, status_code: Optional[int] = None) -> "SendResult":
        return cls(success=False, error=error, status_code=status_code)


class DispatchResult(BaseModel):
    success_count: int = 0
    total_count: int = 0

    @property
    def failed_count(self) -> int:
        return self.total_count - self.success_count

    @property
    def success(self) -> bool:
        # An empty audience is a successful no-op
        return self.total_count == 0 or self.success_count > 0


class DispatchResponse(BaseModel):
    success: bool
    success_count: int
    total_count: int
    failed_count: int
    message: str

    @classmethod
    def from_result(cls, result: DispatchResult) -> "DispatchResponse":
        return cls(
            success=result.success,
            success_count=result.success_count,
            total_count=result.total_count,
            failed_count=result.failed_count,
            message=f"Sent {result.success_count} of {result.total_count} emails",
        )


class BulkWelcomeRequest(BaseModel):
    students: List[Recipient]


# ============================================================
# MAIL BOT SCHEMAS
# ============================================================

class DraftRequest(BaseModel):
    company_name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    raw_context: str = Field(..., min_length=1)


class DraftResponse(BaseModel):
    draft: str
    generated: bool


class MailBotSendRequest(BaseModel):
    company_name: str
    role: str
    draft: str = Field(..., min_length=1)
    recipients: Optional[List[EmailStr]] = None  # None = every registered student


# ============================================================
# AUTH SCHEMAS
# ============================================================

class StudentRegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)
    confirm_password: str
    roll_no: str = Field(..., min_length=1, max_length=50)
    course: str = "M.Sc"
    branch: str
    year: int = Field(..., ge=2000, le=2100)
    cgpa: float = Field(0, ge=0, le=10)
    backlogs: int = Field(0, ge=0)
    skills: List[str] = []
    certifications: List[str] = []
    resume_file_name: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class CompanyRegisterRequest(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=200)
    hr_name: str = Field(..., min_length=2, max_length=100)
    hr_email: EmailStr
    password: str = Field(..., min_length=8)
    confirm_password: str
    website: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str

class UserResponse(BaseModel):
    user_id: int
    email: str
    role: str
    is_active: bool
    created_at: datetime

class RegistrationResponse(BaseModel):
    message: str
    welcome_email_sent: bool


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    roll_no: Optional[str] = None
    course: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[int] = Field(None, ge=2000, le=2100)
    cgpa: Optional[float] = Field(None, ge=0, le=10)
    backlogs: Optional[int] = Field(None, ge=0)
    skills: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    resume_file_name: Optional[str] = None

class StudentResponse(BaseModel):
    student_id: int
    user_id: int
    name: str
    email: str
    roll_no: str
    course: Optional[str] = None
    branch: str
    year: int
    cgpa: float
    backlogs: int
    skills: List[str] = []
    certifications: List[str] = []
    resume_file_name: Optional[str] = None
    resume_uploaded_at: Optional[datetime] = None
    is_verified: bool = False
    is_blacklisted: bool = False
    updated_at: Optional[datetime] = None


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyResponse(BaseModel):
    company_id: int
    user_id: int
    company_name: str
    hr_name: str
    hr_email: str
    website: Optional[str] = None
    description: Optional[str] = None
    is_approved: bool = False
    created_at: datetime


# ============================================================
# DRIVE SCHEMAS
# ============================================================

class DriveCreate(BaseModel):
    role: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = None
    ctc: str
    deadline: date
    eligible_branches: List[str] = []  # empty = all branches
    eligible_years: List[int] = []     # empty = all years
    min_cgpa: float = Field(0, ge=0, le=10)
    max_backlogs: Optional[int] = Field(None, ge=0)  # None = no limit

class DriveResponse(BaseModel):
    drive_id: int
    company_id: int
    company_name: str
    role: str
    description: Optional[str] = None
    ctc: str
    deadline: date
    eligible_branches: List[str] = []
    eligible_years: List[int] = []
    min_cgpa: float = 0
    max_backlogs: Optional[int] = None
    status: str
    created_at: datetime


# ============================================================
# NOTICE / EVENT SCHEMAS
# ============================================================

class NoticeCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    content: str = Field(..., min_length=1)

class NoticeResponse(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    content: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(populate_by_name=True)

class EventCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    event_date: datetime
    venue: Optional[str] = None

class EventResponse(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    description: Optional[str] = None
    event_date: datetime
    venue: Optional[str] = None
    is_active: bool

    model_config = ConfigDict(populate_by_name=True)

class HighlightsResponse(BaseModel):
    latest_notice: Optional[NoticeResponse] = None
    upcoming_events: List[EventResponse] = []


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
    success: bool = False
