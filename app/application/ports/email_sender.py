from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.email import EmailMessage


class EmailSenderPort(ABC):
    @abstractmethod
    async def send(self, message: EmailMessage) -> str | None:
        """Deliver one email. Returns the provider message id; raises NotificationError on failure."""
        raise NotImplementedError
