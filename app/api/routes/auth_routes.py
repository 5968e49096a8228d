"""
Authentication Routes

POST /auth/register/student - Register student + send welcome email
POST /auth/register/company - Register company (pending approval)
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.exc import IntegrityError

from app.db.postgres import fetch_one
from app.core.auth import hash_password, verify_password, create_access_token, get_current_user
from app.schemas.schemas import (
    StudentRegisterRequest, CompanyRegisterRequest, LoginRequest, TokenResponse,
    UserResponse, RegistrationResponse, MessageResponse, Recipient
)
from app.services.notification_service import NotificationService, get_notification_service
from app.services.record_service import (
    StudentRecordService, CompanyRecordService, email_exists, roll_no_exists
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register/student", response_model=RegistrationResponse, status_code=201)
def register_student(
    request: StudentRegisterRequest,
    notifier: NotificationService = Depends(get_notification_service)
):
    """
    Create the student account and profile, then email the login details.

    Password confirmation is checked by the request schema (422) before
    anything touches the database or Listmonk. A failed welcome email
    does not undo the registration.
    """
    if email_exists(request.email):
        raise HTTPException(status_code=400, detail="Account with this email already exists.")

    if roll_no_exists(request.roll_no):
        raise HTTPException(status_code=400, detail="A student with this roll number is already registered.")

    try:
        StudentRecordService().create_with_account(request, hash_password(request.password))
    except IntegrityError:
        # lost a race with a concurrent registration
        raise HTTPException(status_code=400, detail="Account with this email or roll number already exists.")

    result = notifier.send_student_welcome_email(Recipient(
        email=request.email,
        name=request.name,
        roll_no=request.roll_no,
        password=request.password,
    ))
    if not result.success:
        logger.warning("Welcome email to %s failed: %s", request.email, result.error)

    message = "Registration Successful!"
    if result.success:
        message += " A welcome email has been sent to your registered address."
    return RegistrationResponse(message=message, welcome_email_sent=result.success)


@router.post("/register/company", response_model=MessageResponse, status_code=201)
async def register_company(request: CompanyRegisterRequest):
    """Register a recruiter. Login works once the placement cell approves it."""
    if email_exists(request.hr_email):
        raise HTTPException(status_code=400, detail="Account with this email already exists.")

    try:
        CompanyRecordService().create_with_account(request, hash_password(request.password))
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Account with this email already exists.")
    return MessageResponse(message="Registration received. You will be emailed once approved.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = fetch_one(
        "SELECT user_id, password_hash, role, is_active FROM users WHERE email = :email",
        {"email": request.email}
    )

    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    token = create_access_token(data={"sub": str(user["user_id"]), "role": user["role"]})
    return TokenResponse(access_token=token, user_id=user["user_id"], role=user["role"])


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    row = fetch_one(
        "SELECT user_id, email, role, is_active, created_at FROM users WHERE user_id = :id",
        {"id": user["user_id"]}
    )
    return UserResponse(**row)
