from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from app.domain.entities.price_breakdown import DepositDecision
from app.domain.entities.pricing_config import DepositConfig, DepositTrigger


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def deposit_triggered(trigger: DepositTrigger, is_new_client: bool, is_colour_service: bool) -> bool:
    if trigger == DepositTrigger.ALL:
        return True
    if trigger == DepositTrigger.NEW_CLIENT:
        return is_new_client
    if trigger == DepositTrigger.COLOUR:
        return is_colour_service
    return is_new_client or is_colour_service


def decide_deposit(
    total: float,
    is_new_client: bool,
    is_colour_service: bool,
    config: DepositConfig,
) -> DepositDecision:
    """
    Decide whether a deposit is owed against the post-minimum-charge total.

    A percentage deposit is rounded half-up to whole pounds; either kind is
    clamped to [0, total].
    """
    if not config.enabled or not deposit_triggered(config.trigger, is_new_client, is_colour_service):
        return DepositDecision(required=False, amount=0)

    if config.is_percentage:
        amount: float = round_half_up(total * config.amount / 100)
    else:
        amount = config.amount

    amount = min(max(amount, 0), max(total, 0))
    return DepositDecision(required=True, amount=amount)
