from __future__ import annotations

import logging
import time

from app.application.ports.email_sender import EmailSenderPort
from app.domain.entities.email import EmailMessage


class ConsoleEmailSender(EmailSenderPort):
    """Dev fallback: writes the email to the log instead of delivering it."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def send(self, message: EmailMessage) -> str | None:
        self._logger.info(
            "Console email\nTo: %s\nFrom: %s\nSubject: %s\n\n%s",
            message.to,
            message.from_email,
            message.subject,
            message.text,
        )
        return f"console-{int(time.time() * 1000)}"
