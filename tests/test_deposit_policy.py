from __future__ import annotations

from app.application.use_cases.deposit_policy import decide_deposit, deposit_triggered, round_half_up
from app.domain.entities.pricing_config import DepositConfig, DepositTrigger


def test_default_trigger_is_new_client_or_colour():
    """Test the new-client-or-colour trigger truth table."""
    trigger = DepositTrigger.NEW_CLIENT_OR_COLOUR
    assert deposit_triggered(trigger, is_new_client=True, is_colour_service=False) is True
    assert deposit_triggered(trigger, is_new_client=False, is_colour_service=True) is True
    assert deposit_triggered(trigger, is_new_client=False, is_colour_service=False) is False


def test_other_triggers():
    assert deposit_triggered(DepositTrigger.ALL, False, False) is True
    assert deposit_triggered(DepositTrigger.NEW_CLIENT, False, True) is False
    assert deposit_triggered(DepositTrigger.COLOUR, True, False) is False
    assert deposit_triggered(DepositTrigger.COLOUR, False, True) is True


def test_fixed_deposit():
    """Test that a fixed deposit is charged as configured."""
    decision = decide_deposit(35, True, False, DepositConfig(amount=20))
    assert decision.required is True
    assert decision.amount == 20


def test_percentage_deposit_rounds_half_up():
    """Test that 10% of £35 (3.5) rounds up to £4 and 10% of £25 (2.5) to £3."""
    config = DepositConfig(amount=10, is_percentage=True, trigger=DepositTrigger.ALL)
    assert decide_deposit(35, False, False, config).amount == 4
    assert decide_deposit(25, False, False, config).amount == 3
    assert round_half_up(0.5) == 1


def test_disabled_deposit():
    decision = decide_deposit(100, True, True, DepositConfig(enabled=False))
    assert decision.required is False
    assert decision.amount == 0


def test_deposit_clamped_to_total():
    """Test that the deposit never exceeds the amount being paid."""
    decision = decide_deposit(12, True, False, DepositConfig(amount=20))
    assert decision.amount == 12
