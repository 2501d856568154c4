from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.pricing_config import TravelTier


@dataclass(frozen=True)
class AreaResolution:
    normalized_postcode: str
    district: str
    distance_miles: float | None
    tier: TravelTier
    within_core_radius: bool
    minimum_booking_minutes: int
    message: str

    @property
    def enquiry_only(self) -> bool:
        return self.tier.enquiry_only

    @property
    def travel_fee(self) -> float:
        return 0 if self.tier.enquiry_only else self.tier.fee
