from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceBreakdownItem:
    label: str
    amount: float  # negative for discounts
    kind: str  # service | addon | travel | surcharge | discount | adjustment


@dataclass(frozen=True)
class PricedLine:
    """A canonical (server-resolved) price and duration for one line of a booking."""

    id: str
    name: str
    price: float
    duration_minutes: int
    hair_length_surcharge_eligible: bool = False


@dataclass(frozen=True)
class BookingPriceInput:
    service: PricedLine
    category: str
    add_ons: tuple[PricedLine, ...] = ()
    additional_clients: tuple[PricedLine, ...] = ()
    hair_length_surcharge: bool = False
    is_same_day: bool = False
    is_new_client: bool = False
    is_colour_service: bool = False
    travel_fee: float = 0
    package_discount: PriceBreakdownItem | None = None


@dataclass(frozen=True)
class DepositDecision:
    required: bool
    amount: float


@dataclass(frozen=True)
class PriceBreakdown:
    items: tuple[PriceBreakdownItem, ...]
    subtotal: float
    total: float
    minimum_charge_applied: bool
    deposit_required: bool
    deposit_amount: float
    estimated_duration_minutes: int
    savings: float = 0
    config_version: str | None = None
    travel_fee: float = 0
