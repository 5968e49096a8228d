"""
Student Routes

GET /students/profile - Get own profile
PUT /students/profile - Update profile
GET /students/drives - Open drives the student is eligible for
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.auth import get_current_student
from app.schemas.schemas import StudentUpdate, StudentResponse, DriveResponse, MessageResponse
from app.services.eligibility import is_eligible
from app.services.record_service import StudentRecordService, DriveRecordService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/profile", response_model=StudentResponse)
async def get_profile(student: dict = Depends(get_current_student)):
    """Get current student's profile."""
    profile = StudentRecordService().get_by_user(student["user_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found")
    return StudentResponse(**profile)


@router.put("/profile", response_model=MessageResponse)
async def update_profile(data: StudentUpdate, student: dict = Depends(get_current_student)):
    """Update student profile. Only the fields sent are changed."""
    updates = data.model_dump(exclude_unset=True)
    for key in ("skills", "certifications"):
        if updates.get(key) is not None:
            updates[key] = [s.strip() for s in updates[key] if s and s.strip()]

    if not StudentRecordService().update(student["student_id"], updates):
        raise HTTPException(status_code=400, detail="No fields to update")

    return MessageResponse(message="Profile updated successfully!")


@router.get("/drives", response_model=List[DriveResponse])
async def get_eligible_drives(student: dict = Depends(get_current_student)):
    """Open drives whose eligibility criteria this student meets."""
    profile = StudentRecordService().get_by_user(student["user_id"])
    return [
        DriveResponse(**d) for d in DriveRecordService().list_open()
        if is_eligible(profile, d)
    ]
