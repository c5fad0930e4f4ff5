"""문의 서비스.

Contact service — Forwards student contact-form messages to the
administration inbox over SMTP. Without a configured inbox the message is
only logged.
"""

import html
import logging

import aiosmtplib

from suggestion_box.config import settings
from suggestion_box.schemas.contact import ContactMessageCreate
from suggestion_box.utils.email import send_email
from suggestion_box.utils.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


class ContactService:

    async def send_message(self, data: ContactMessageCreate) -> None:
        if not settings.CONTACT_INBOX_EMAIL:
            logger.info("Contact message from %s (%s) not forwarded: no inbox configured", data.name, data.subject)
            return

        body = (
            f"<p><strong>From:</strong> {html.escape(data.name)} &lt;{html.escape(data.email)}&gt;</p>"
            f"<p>{html.escape(data.message)}</p>"
        )
        try:
            await send_email(
                to=settings.CONTACT_INBOX_EMAIL,
                subject=f"[Suggestion Box] {data.subject}",
                html=body,
                text=f"From: {data.name} <{data.email}>\n\n{data.message}",
                reply_to=data.email,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("Forwarding contact message failed: %s", exc)
            raise ServiceUnavailableError("Failed to send your message. Please try again.") from exc


contact_service: ContactService = ContactService()
