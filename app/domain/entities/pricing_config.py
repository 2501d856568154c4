from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DepositTrigger(str, Enum):
    ALL = "all"
    NEW_CLIENT = "new-client"
    COLOUR = "colour"
    NEW_CLIENT_OR_COLOUR = "new-client-or-colour"


@dataclass(frozen=True)
class TravelTier:
    id: str
    label: str
    min_miles: float
    max_miles: float
    fee: float
    enquiry_only: bool = False
    areas: str | None = None


BEYOND_TIER = TravelTier(
    id="beyond",
    label="Beyond service area",
    min_miles=0,
    max_miles=0,
    fee=0,
    enquiry_only=True,
)


@dataclass(frozen=True)
class HairLengthSurcharge:
    enabled: bool = True
    amount: float = 10
    label: str = "Long/thick hair surcharge"


@dataclass(frozen=True)
class SameDaySurcharge:
    enabled: bool = False
    amount: float = 10
    label: str = "Same-day booking fee"


@dataclass(frozen=True)
class GroupBookingRule:
    enabled: bool = True
    max_additional_clients: int = 3
    discount_per_client: float = 5
    applies_to: tuple[str, ...] = ("hairdressing",)  # service categories


@dataclass(frozen=True)
class DepositConfig:
    enabled: bool = True
    amount: float = 20
    is_percentage: bool = False
    trigger: DepositTrigger = DepositTrigger.NEW_CLIENT_OR_COLOUR


@dataclass(frozen=True)
class PricingConfig:
    """Process-wide pricing rules. Built once at startup, never mutated."""

    version: str
    minimum_charge: float
    minimum_booking_minutes: int
    minimum_booking_minutes_distant: int
    distant_threshold_miles: float
    core_radius_miles: float
    travel_tiers: tuple[TravelTier, ...]
    hair_length: HairLengthSurcharge = field(default_factory=HairLengthSurcharge)
    same_day: SameDaySurcharge = field(default_factory=SameDaySurcharge)
    group_booking: GroupBookingRule = field(default_factory=GroupBookingRule)
    deposit: DepositConfig = field(default_factory=DepositConfig)

    @property
    def max_service_radius_miles(self) -> float:
        return self.travel_tiers[-1].max_miles if self.travel_tiers else 0
