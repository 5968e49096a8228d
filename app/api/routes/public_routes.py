"""
Public Routes (no login)

GET /public/highlights - Latest notice + next two events (landing page)
GET /public/notices - Active notices
GET /public/events - Upcoming events
"""

from fastapi import APIRouter, Query
from typing import List

from app.schemas.schemas import HighlightsResponse, NoticeResponse, EventResponse
from app.services.record_service import NoticeService, EventService

router = APIRouter(prefix="/public", tags=["Public"])


@router.get("/highlights", response_model=HighlightsResponse)
async def get_highlights():
    notices = NoticeService().get_active(limit=1)
    events = EventService().get_active(limit=2)
    return HighlightsResponse(
        latest_notice=NoticeResponse(**notices[0]) if notices else None,
        upcoming_events=[EventResponse(**e) for e in events]
    )


@router.get("/notices", response_model=List[NoticeResponse])
async def get_notices(limit: int = Query(20, ge=1, le=100)):
    return [NoticeResponse(**n) for n in NoticeService().get_active(limit=limit)]


@router.get("/events", response_model=List[EventResponse])
async def get_events(limit: int = Query(20, ge=1, le=100)):
    return [EventResponse(**e) for e in EventService().get_active(limit=limit)]
