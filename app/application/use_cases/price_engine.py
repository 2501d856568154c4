from __future__ import annotations

from app.application.use_cases.deposit_policy import decide_deposit
from app.domain.entities.price_breakdown import BookingPriceInput, PriceBreakdown, PriceBreakdownItem
from app.domain.entities.pricing_config import PricingConfig


def _money(value: float) -> float:
    return round(value, 2)


class PriceEngine:
    """
    Composes canonical prices into an itemised breakdown.

    Deterministic: the result depends only on the input and the pricing config
    the engine was built with. Callers are responsible for resolving every
    price in `BookingPriceInput` from the catalogue first.
    """

    def __init__(self, config: PricingConfig) -> None:
        self._config = config

    @property
    def config(self) -> PricingConfig:
        return self._config

    def compute_breakdown(self, data: BookingPriceInput) -> PriceBreakdown:
        config = self._config
        items: list[PriceBreakdownItem] = []
        duration = data.service.duration_minutes
        savings = 0.0

        items.append(PriceBreakdownItem(data.service.name, _money(data.service.price), "service"))

        for add_on in data.add_ons:
            items.append(PriceBreakdownItem(add_on.name, _money(add_on.price), "addon"))
            duration += add_on.duration_minutes

        if data.additional_clients:
            for client in data.additional_clients:
                items.append(
                    PriceBreakdownItem(f"Additional: {client.name}", _money(client.price), "service")
                )
                duration += client.duration_minutes

            group = config.group_booking
            if group.enabled and data.category in group.applies_to:
                count = len(data.additional_clients)
                group_discount = _money(count * group.discount_per_client)
                if group_discount > 0:
                    items.append(
                        PriceBreakdownItem(f"Group discount ({count} additional)", -group_discount, "discount")
                    )
                    savings += group_discount

        hair = config.hair_length
        if data.hair_length_surcharge and hair.enabled and data.service.hair_length_surcharge_eligible:
            items.append(PriceBreakdownItem(hair.label, _money(hair.amount), "surcharge"))

        same_day = config.same_day
        if data.is_same_day and same_day.enabled:
            items.append(PriceBreakdownItem(same_day.label, _money(same_day.amount), "surcharge"))

        if data.travel_fee > 0:
            items.append(PriceBreakdownItem("Travel fee", _money(data.travel_fee), "travel"))

        if data.package_discount is not None and data.package_discount.amount != 0:
            package_amount = _money(abs(data.package_discount.amount))
            items.append(PriceBreakdownItem(data.package_discount.label, -package_amount, "discount"))
            savings += package_amount

        subtotal = _money(sum(item.amount for item in items))
        total = subtotal
        minimum_applied = False
        if subtotal < config.minimum_charge:
            adjustment = _money(config.minimum_charge - subtotal)
            items.append(PriceBreakdownItem("Minimum appointment adjustment", adjustment, "adjustment"))
            total = _money(config.minimum_charge)
            minimum_applied = True

        deposit = decide_deposit(total, data.is_new_client, data.is_colour_service, config.deposit)

        return PriceBreakdown(
            items=tuple(items),
            subtotal=subtotal,
            total=total,
            minimum_charge_applied=minimum_applied,
            deposit_required=deposit.required,
            deposit_amount=deposit.amount,
            estimated_duration_minutes=duration,
            savings=_money(savings),
            config_version=config.version,
            travel_fee=_money(data.travel_fee) if data.travel_fee > 0 else 0,
        )
