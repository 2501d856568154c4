from __future__ import annotations

import logging
from typing import Mapping

from app.application.utils.postcode import district_lookup_keys, extract_district, normalize_postcode
from app.domain.entities.area import AreaResolution
from app.domain.entities.pricing_config import BEYOND_TIER, PricingConfig, TravelTier


class AreaResolver:
    """Maps a raw postcode to a distance estimate and a travel tier. Pure; never raises."""

    def __init__(self, config: PricingConfig, distances: Mapping[str, float]) -> None:
        self._config = config
        self._distances = distances
        self._logger = logging.getLogger(__name__)

    def resolve(self, raw_postcode: str) -> AreaResolution:
        normalized = normalize_postcode(raw_postcode or "")
        district = extract_district(normalized)
        distance = self.distance_for_district(district)

        if distance is None:
            tier = BEYOND_TIER
        else:
            tier = self.tier_for_distance(distance)

        within_core = distance is not None and distance <= self._config.core_radius_miles
        is_distant = distance is not None and distance > self._config.distant_threshold_miles
        minimum_minutes = (
            self._config.minimum_booking_minutes_distant
            if is_distant and not tier.enquiry_only
            else self._config.minimum_booking_minutes
        )

        resolution = AreaResolution(
            normalized_postcode=normalized,
            district=district,
            distance_miles=distance,
            tier=tier,
            within_core_radius=within_core and not tier.enquiry_only,
            minimum_booking_minutes=minimum_minutes,
            message=self._message(tier, distance, is_distant, minimum_minutes),
        )
        self._logger.debug(
            "Postcode resolved",
            extra={"postcode": normalized, "district": district, "reason": tier.id},
        )
        return resolution

    def distance_for_district(self, district: str) -> float | None:
        for key in district_lookup_keys(district):
            distance = self._distances.get(key)
            if distance is not None:
                return distance
        return None

    def tier_for_distance(self, distance: float) -> TravelTier:
        """
        Tiers are half-open [min, max) so a shared boundary belongs to the farther tier.
        The last tier also includes its max, which is the advertised service radius.
        """
        tiers = self._config.travel_tiers
        for index, tier in enumerate(tiers):
            is_last = index == len(tiers) - 1
            if tier.min_miles <= distance < tier.max_miles:
                return tier
            if is_last and distance == tier.max_miles:
                return tier
        return BEYOND_TIER

    def _message(self, tier: TravelTier, distance: float | None, is_distant: bool, minimum_minutes: int) -> str:
        if tier.enquiry_only:
            if distance is None:
                return (
                    "Sorry, we couldn't recognise that postcode. "
                    "Please send an enquiry and we'll check whether we cover your area."
                )
            return (
                f"Your area ({distance:g} miles away) is beyond our usual "
                f"{self._config.max_service_radius_miles:g}-mile service radius. "
                "We may still be able to help by special arrangement - please send an enquiry."
            )

        message = "Great news! You're within our service area."
        if tier.fee > 0:
            message += f" A £{tier.fee:g} travel fee applies for your location."
        else:
            message += " No travel fee applies - you're in our core area."
        if is_distant:
            hours = minimum_minutes / 60
            message += f" Note: a minimum {hours:g}-hour booking applies for your area."
        return message
