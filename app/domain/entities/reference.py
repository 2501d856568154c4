from __future__ import annotations

from enum import Enum


class ReferencePrefix(str, Enum):
    BOOKING = "CHS"
    ENQUIRY = "ENQ"


SPAM_SENTINEL_REFERENCE = "SPAM-BLOCKED"
