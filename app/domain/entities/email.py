from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    to: str
    from_email: str
    subject: str
    text: str
    reply_to: str | None = None
    from_name: str | None = None
