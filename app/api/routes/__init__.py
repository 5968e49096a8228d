"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.auth_routes import router as auth_router
from app.api.routes.student_routes import router as student_router
from app.api.routes.company_routes import router as company_router
from app.api.routes.drive_routes import router as drive_router
from app.api.routes.mailbot_routes import router as mailbot_router
from app.api.routes.admin_routes import router as admin_router
from app.api.routes.public_routes import router as public_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(company_router)
api_router.include_router(drive_router)
api_router.include_router(mailbot_router)
api_router.include_router(admin_router)
api_router.include_router(public_router)
