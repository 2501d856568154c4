from __future__ import annotations

import secrets
import string
from datetime import datetime, timezone
from typing import Callable

from app.domain.entities.reference import ReferencePrefix


REFERENCE_ALPHABET = string.ascii_uppercase + string.digits
REFERENCE_PATTERN = r"^(CHS|ENQ)-\d{8}-[A-Z0-9]{4}$"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReferenceGenerator:
    """
    Issues `<PREFIX>-<YYYYMMDD>-<XXXX>` references.

    Uniqueness is probabilistic only (36^4 codes per prefix per day); nothing
    is checked against previously issued references.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = _utc_now,
        choice: Callable[[str], str] = secrets.choice,
        length: int = 4,
    ) -> None:
        self._clock = clock
        self._choice = choice
        self._length = length

    def generate(self, prefix: ReferencePrefix | str, now: datetime | None = None) -> str:
        moment = now or self._clock()
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        prefix_value = prefix.value if isinstance(prefix, ReferencePrefix) else str(prefix)
        random_part = "".join(self._choice(REFERENCE_ALPHABET) for _ in range(self._length))
        return f"{prefix_value}-{moment.strftime('%Y%m%d')}-{random_part}"
