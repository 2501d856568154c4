from __future__ import annotations

import logging

import httpx

from app.application.exceptions import NotificationError
from app.application.ports.email_sender import EmailSenderPort
from app.domain.entities.email import EmailMessage


class ResendEmailSender(EmailSenderPort):
    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not api_key:
            raise ValueError("RESEND_API_KEY is required for the Resend email sender")
        self._api_key = api_key
        self._api_url = api_url
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def send(self, message: EmailMessage) -> str | None:
        sender = f"{message.from_name} <{message.from_email}>" if message.from_name else message.from_email
        payload: dict[str, object] = {
            "from": sender,
            "to": [message.to],
            "subject": message.subject,
            "text": message.text,
        }
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            resp = await self._client.post(self._api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise NotificationError(f"Resend request failed: {e}") from e

        if resp.status_code >= 400:
            try:
                error_message = resp.json().get("message")
            except ValueError:
                error_message = resp.text
            self._logger.error(
                "Resend send failed",
                extra={"status": resp.status_code, "error": error_message, "subject": message.subject},
            )
            raise NotificationError(f"Resend rejected email ({resp.status_code}): {error_message}")

        try:
            return resp.json().get("id")
        except ValueError:
            return None

    async def aclose(self) -> None:
        await self._client.aclose()
