"""
Admin Routes (placement cell)

POST /admin/companies/{id}/approve - Approve recruiter + send approval email
POST /admin/students/welcome - Bulk welcome emails
POST /admin/notices - Publish a notice
DELETE /admin/notices/{id} - Take a notice down
POST /admin/events - Publish an event
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from app.core.auth import get_current_admin
from app.schemas.schemas import (
    BulkWelcomeRequest, DispatchResponse, NoticeCreate, EventCreate, MessageResponse
)
from app.services.notification_service import (
    NotificationService, DispatchInProgressError, get_notification_service
)
from app.services.record_service import CompanyRecordService, NoticeService, EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/companies/{company_id}/approve", response_model=MessageResponse)
def approve_company(
    company_id: int,
    admin: dict = Depends(get_current_admin),
    notifier: NotificationService = Depends(get_notification_service)
):
    records = CompanyRecordService()
    company = records.get(company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    if not records.approve(company_id):
        raise HTTPException(status_code=400, detail="Company is already approved")

    result = notifier.send_company_approval_email(company)
    if not result.success:
        logger.warning("Approval email for company %s failed: %s", company_id, result.error)
        return MessageResponse(
            message=f"{company['company_name']} approved, but the approval email could not be sent",
            success=False
        )
    return MessageResponse(message=f"{company['company_name']} approved and notified")


@router.post("/students/welcome", response_model=DispatchResponse)
def send_bulk_welcome(
    request: BulkWelcomeRequest,
    admin: dict = Depends(get_current_admin),
    notifier: NotificationService = Depends(get_notification_service)
):
    try:
        result = notifier.send_bulk_student_welcome_emails(request.students)
    except DispatchInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return DispatchResponse.from_result(result)


@router.post("/notices", response_model=MessageResponse, status_code=201)
async def create_notice(data: NoticeCreate, admin: dict = Depends(get_current_admin)):
    notice_id = NoticeService().insert(data.title, data.content)
    return MessageResponse(message=f"Notice {notice_id} published")


@router.delete("/notices/{notice_id}", response_model=MessageResponse)
async def deactivate_notice(notice_id: str, admin: dict = Depends(get_current_admin)):
    if not NoticeService().deactivate(notice_id):
        raise HTTPException(status_code=404, detail="Notice not found")
    return MessageResponse(message="Notice removed")


@router.post("/events", response_model=MessageResponse, status_code=201)
async def create_event(data: EventCreate, admin: dict = Depends(get_current_admin)):
    event_id = EventService().insert(data.title, data.event_date, data.description, data.venue)
    return MessageResponse(message=f"Event {event_id} published")
