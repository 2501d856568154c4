from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from app.application.exceptions import PricingConfigError
from app.domain.entities.pricing_config import (
    DepositConfig,
    DepositTrigger,
    GroupBookingRule,
    HairLengthSurcharge,
    PricingConfig,
    SameDaySurcharge,
    TravelTier,
)
from app.infrastructure.knowledge.pricing_data import DEFAULT_PRICING_CONFIG


logger = logging.getLogger(__name__)


def validate_pricing_config(config: PricingConfig) -> PricingConfig:
    """Check that tiers partition [0, max] with no gaps or overlaps and amounts are sane."""
    if config.minimum_charge < 0:
        raise PricingConfigError(f"minimum_charge must be >= 0, got {config.minimum_charge}")
    if not config.travel_tiers:
        raise PricingConfigError("At least one travel tier is required")

    expected_start = 0.0
    for tier in config.travel_tiers:
        if tier.min_miles != expected_start:
            raise PricingConfigError(
                f"Travel tier '{tier.id}' starts at {tier.min_miles} miles, expected {expected_start}"
            )
        if tier.max_miles <= tier.min_miles:
            raise PricingConfigError(f"Travel tier '{tier.id}' has an empty mile range")
        if tier.fee < 0:
            raise PricingConfigError(f"Travel tier '{tier.id}' has a negative fee")
        expected_start = tier.max_miles

    fees = [tier.fee for tier in config.travel_tiers]
    if fees != sorted(fees):
        raise PricingConfigError("Travel tier fees must not decrease with distance")

    deposit = config.deposit
    if deposit.amount < 0:
        raise PricingConfigError("Deposit amount must be >= 0")
    if deposit.is_percentage and deposit.amount > 100:
        raise PricingConfigError("Percentage deposit must be <= 100")
    if config.group_booking.max_additional_clients < 0:
        raise PricingConfigError("max_additional_clients must be >= 0")
    return config


def _build_from_dict(data: dict[str, Any]) -> PricingConfig:
    try:
        surcharges = data.get("surcharges", {})
        hair = surcharges.get("hair_length", {})
        same_day = surcharges.get("same_day", {})
        group = data.get("group_booking", {})
        deposit = data.get("deposit", {})
        return PricingConfig(
            version=str(data["version"]),
            minimum_charge=float(data["minimum_charge"]),
            minimum_booking_minutes=int(data["minimum_booking_minutes"]),
            minimum_booking_minutes_distant=int(data["minimum_booking_minutes_distant"]),
            distant_threshold_miles=float(data["distant_threshold_miles"]),
            core_radius_miles=float(data["core_radius_miles"]),
            travel_tiers=tuple(TravelTier(**tier) for tier in data["travel_tiers"]),
            hair_length=HairLengthSurcharge(
                enabled=hair.get("enabled", True),
                amount=hair.get("amount", 10),
                label=hair.get("label", "Long/thick hair surcharge"),
            ),
            same_day=SameDaySurcharge(**same_day),
            group_booking=GroupBookingRule(
                enabled=group.get("enabled", True),
                max_additional_clients=group.get("max_additional_clients", 3),
                discount_per_client=group.get("discount_per_client", 5),
                applies_to=tuple(group.get("applies_to", ("hairdressing",))),
            ),
            deposit=DepositConfig(
                enabled=deposit.get("enabled", True),
                amount=deposit.get("amount", 20),
                is_percentage=deposit.get("is_percentage", False),
                trigger=DepositTrigger(deposit.get("trigger", DepositTrigger.NEW_CLIENT_OR_COLOUR.value)),
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PricingConfigError(f"Invalid pricing config: {e}") from e


def load_pricing_config(path: str | None = None) -> PricingConfig:
    """Load pricing rules from a JSON file, or fall back to the built-in defaults."""
    if not path:
        return validate_pricing_config(DEFAULT_PRICING_CONFIG)

    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PricingConfigError(f"Could not read pricing config {file_path}: {e}") from e

    config = validate_pricing_config(_build_from_dict(data))
    logger.info("Pricing config loaded", extra={"version": config.version, "path": str(file_path)})
    return config
