"""
Company Routes

GET /companies/profile - Get own profile
"""

from fastapi import APIRouter, HTTPException, Depends

from app.core.auth import get_current_company
from app.schemas.schemas import CompanyResponse
from app.services.record_service import CompanyRecordService

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("/profile", response_model=CompanyResponse)
async def get_profile(company: dict = Depends(get_current_company)):
    """Get current company's profile."""
    row = CompanyRecordService().get(company["company_id"])
    if not row:
        raise HTTPException(status_code=404, detail="Company profile not found")
    return CompanyResponse(**row)
