from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.application.dto.enquiry_request import EnquiryRequestDTO
from app.application.exceptions import SpamDetected
from app.application.use_cases.notify import BookingNotifier
from app.application.use_cases.references import ReferenceGenerator
from app.application.use_cases.request_guard import RequestGuard
from app.application.use_cases.resolve_area import AreaResolver
from app.domain.entities.area import AreaResolution
from app.domain.entities.reference import SPAM_SENTINEL_REFERENCE, ReferencePrefix


@dataclass(frozen=True)
class EnquiryOutcome:
    reference: str
    area: AreaResolution | None
    notified: bool
    spam: bool = False


class SubmitEnquiryUseCase:
    """Free-text enquiries are accepted from any postcode; the area is resolved only to brief the business."""

    SCOPE = "enquiry"

    def __init__(
        self,
        guard: RequestGuard,
        area_resolver: AreaResolver,
        references: ReferenceGenerator,
        notifier: BookingNotifier,
    ) -> None:
        self._guard = guard
        self._area_resolver = area_resolver
        self._references = references
        self._notifier = notifier
        self._logger = logging.getLogger(__name__)

    async def execute(self, raw_body: Any, source_ip: str) -> EnquiryOutcome:
        try:
            enquiry = self._guard.admit(raw_body, source_ip, EnquiryRequestDTO, scope=self.SCOPE)
        except SpamDetected:
            return EnquiryOutcome(reference=SPAM_SENTINEL_REFERENCE, area=None, notified=False, spam=True)

        area = self._area_resolver.resolve(enquiry.postcode)
        reference = self._references.generate(ReferencePrefix.ENQUIRY)
        notified = await self._notifier.notify_enquiry(enquiry, area, reference)

        self._logger.info(
            "Enquiry accepted",
            extra={
                "reference": reference,
                "postcode": area.normalized_postcode,
                "district": area.district,
                "reason": enquiry.reason,
            },
        )
        return EnquiryOutcome(reference=reference, area=area, notified=notified)
