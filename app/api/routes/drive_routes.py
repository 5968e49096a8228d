"""
Drive Routes

POST /drives - Post a recruitment drive (approved companies)
GET /drives - List own drives
GET /drives/{id} - Drive details
POST /drives/{id}/notify - Email every eligible student (owner company or admin)
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.auth import get_current_company, get_current_user
from app.schemas.schemas import DriveCreate, DriveResponse, DispatchResponse, MessageResponse
from app.services.notification_service import (
    NotificationService, DispatchInProgressError, get_notification_service
)
from app.services.record_service import DriveRecordService, CompanyRecordService

router = APIRouter(prefix="/drives", tags=["Drives"])


@router.post("", response_model=MessageResponse, status_code=201)
async def create_drive(data: DriveCreate, company: dict = Depends(get_current_company)):
    drive_id = DriveRecordService().create(company["company_id"], data)
    return MessageResponse(message=f"Drive {drive_id} created")


@router.get("", response_model=List[DriveResponse])
async def list_drives(company: dict = Depends(get_current_company)):
    return [DriveResponse(**d) for d in DriveRecordService().list_by_company(company["company_id"])]


@router.get("/{drive_id}", response_model=DriveResponse)
async def get_drive(drive_id: int, user: dict = Depends(get_current_user)):
    drive = DriveRecordService().get(drive_id)
    if not drive:
        raise HTTPException(status_code=404, detail="Drive not found")
    return DriveResponse(**drive)


@router.post("/{drive_id}/notify", response_model=DispatchResponse)
def notify_eligible_students(
    drive_id: int,
    user: dict = Depends(get_current_user),
    notifier: NotificationService = Depends(get_notification_service)
):
    """
    Send the drive announcement to every eligible student.
    Runs to completion; a drive with no eligible students sends nothing.
    """
    drive = DriveRecordService().get(drive_id)
    if not drive:
        raise HTTPException(status_code=404, detail="Drive not found")

    company = CompanyRecordService().get(drive["company_id"])
    if user["role"] != "admin" and (user["role"] != "company" or company["user_id"] != user["user_id"]):
        raise HTTPException(status_code=403, detail="Only the posting company or the placement cell can notify")

    try:
        result = notifier.notify_eligible_students(drive, company)
    except DispatchInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return DispatchResponse.from_result(result)
