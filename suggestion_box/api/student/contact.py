"""문의 라우터 (Contact form router)."""

from fastapi import APIRouter, status

from suggestion_box.schemas.common import MessageResponse
from suggestion_box.schemas.contact import ContactMessageCreate
from suggestion_box.services.contact_service import contact_service

router: APIRouter = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
async def send_contact_message(data: ContactMessageCreate) -> dict:
    """문의 전송 — 행정실 메일함으로 전달 (Forward to the administration inbox)."""
    await contact_service.send_message(data)
    return {"message": "Thank you for your message! We'll get back to you soon."}
