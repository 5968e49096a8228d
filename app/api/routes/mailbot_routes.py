"""
Mail Bot Routes (placement cell only)

POST /mailbot/draft - AI-generated email draft for review
POST /mailbot/send - Broadcast a reviewed draft
"""

from fastapi import APIRouter, HTTPException, Depends

from app.core.auth import get_current_admin
from app.schemas.schemas import DraftRequest, DraftResponse, MailBotSendRequest, DispatchResponse
from app.services.mailbot_service import MailBotService, get_mailbot_service
from app.services.notification_service import DispatchInProgressError

router = APIRouter(prefix="/mailbot", tags=["Mail Bot"])


@router.post("/draft", response_model=DraftResponse)
def generate_draft(
    request: DraftRequest,
    admin: dict = Depends(get_current_admin),
    mailbot: MailBotService = Depends(get_mailbot_service)
):
    """
    Ask the AI for a draft. Never fails: if the provider is down or the key
    is missing, the draft field holds an error message and generated=False.
    """
    return mailbot.draft(request.company_name, request.role, request.raw_context)


@router.post("/send", response_model=DispatchResponse)
def send_broadcast(
    request: MailBotSendRequest,
    admin: dict = Depends(get_current_admin),
    mailbot: MailBotService = Depends(get_mailbot_service)
):
    """
    Send the reviewed draft. Without `recipients`, every registered student
    gets it. 502 when nothing at all could be delivered.
    """
    try:
        result = mailbot.send(
            request.company_name,
            request.role,
            request.draft,
            [str(r) for r in request.recipients] if request.recipients is not None else None,
        )
    except DispatchInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not result.success:
        raise HTTPException(
            status_code=502,
            detail="Failed to send emails via Listmonk. Please check LISTMONK_URL and credentials."
        )
    return DispatchResponse.from_result(result)
