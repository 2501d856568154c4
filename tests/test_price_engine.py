"""
Tests for the itemised price breakdown.
"""

from __future__ import annotations

from dataclasses import replace

from app.application.use_cases.price_engine import PriceEngine
from app.domain.entities.price_breakdown import BookingPriceInput, PriceBreakdownItem, PricedLine
from app.domain.entities.pricing_config import SameDaySurcharge
from app.infrastructure.knowledge.pricing_data import DEFAULT_PRICING_CONFIG


CUT = PricedLine("cut-blow-dry", "Cut & Blow-Dry", 35, 60)


def _items_total(breakdown) -> float:
    return round(sum(item.amount for item in breakdown.items), 2)


def test_single_service_new_client(price_engine):
    """Test the basic scenario: £35 service, core area, new client pays a £20 deposit."""
    breakdown = price_engine.compute_breakdown(
        BookingPriceInput(service=CUT, category="hairdressing", is_new_client=True)
    )

    assert breakdown.total == 35
    assert breakdown.subtotal == 35
    assert breakdown.minimum_charge_applied is False
    assert breakdown.deposit_required is True
    assert breakdown.deposit_amount == 20
    assert breakdown.estimated_duration_minutes == 60
    assert breakdown.config_version == DEFAULT_PRICING_CONFIG.version


def test_returning_client_without_colour_pays_no_deposit(price_engine):
    """Test that the default trigger skips returning non-colour clients."""
    breakdown = price_engine.compute_breakdown(
        BookingPriceInput(service=CUT, category="hairdressing", is_new_client=False)
    )

    assert breakdown.deposit_required is False
    assert breakdown.deposit_amount == 0


def test_minimum_charge_floor(price_engine):
    """Test that a £15 booking is raised to the £30 minimum with a visible adjustment."""
    small = PricedLine("small", "Small job", 15, 15)
    breakdown = price_engine.compute_breakdown(BookingPriceInput(service=small, category="hairdressing"))

    assert breakdown.subtotal == 15
    assert breakdown.total == 30
    assert breakdown.minimum_charge_applied is True
    assert breakdown.items[-1].kind == "adjustment"
    assert breakdown.items[-1].amount == 15
    assert _items_total(breakdown) == breakdown.total


def test_group_booking_discount(price_engine):
    """Test that one additional hairdressing client earns a single £5 discount."""
    restyle = PricedLine("restyle-cut", "Restyle Cut", 45, 75)
    friend = PricedLine("extra", "Wash & Cut", 30, 45)
    breakdown = price_engine.compute_breakdown(
        BookingPriceInput(service=restyle, category="hairdressing", additional_clients=(friend,))
    )

    assert breakdown.total == 70
    assert breakdown.savings == 5
    assert breakdown.estimated_duration_minutes == 120
    discounts = [item for item in breakdown.items if item.kind == "discount"]
    assert len(discounts) == 1
    assert discounts[0].amount == -5
    assert _items_total(breakdown) == breakdown.total


def test_group_discount_only_for_eligible_categories(price_engine):
    """Test that companionship bookings with extra clients get no group discount."""
    visit = PricedLine("companion-1hr", "1 Hour Visit", 20, 60)
    breakdown = price_engine.compute_breakdown(
        BookingPriceInput(service=visit, category="companionship", additional_clients=(visit,))
    )

    assert all(item.kind != "discount" for item in breakdown.items)
    assert breakdown.total == 40


def test_add_ons_and_travel_fee(price_engine):
    """Test that add-ons and travel are separate line items that sum to the total."""
    conditioning = PricedLine("deep-conditioning", "Deep Conditioning Treatment", 10, 15)
    breakdown = price_engine.compute_breakdown(
        BookingPriceInput(service=CUT, category="hairdressing", add_ons=(conditioning,), travel_fee=5)
    )

    kinds = [item.kind for item in breakdown.items]
    assert kinds == ["service", "addon", "travel"]
    assert breakdown.total == 50
    assert breakdown.travel_fee == 5
    assert breakdown.estimated_duration_minutes == 75


def test_hair_length_surcharge_only_for_eligible_services(price_engine):
    """Test that the long-hair surcharge applies to colour services and not to cuts."""
    colour = PricedLine("full-colour", "Full Head Colour", 55, 120, hair_length_surcharge_eligible=True)

    with_colour = price_engine.compute_breakdown(
        BookingPriceInput(service=colour, category="hairdressing", hair_length_surcharge=True)
    )
    with_cut = price_engine.compute_breakdown(
        BookingPriceInput(service=CUT, category="hairdressing", hair_length_surcharge=True)
    )

    assert with_colour.total == 65
    assert any(item.kind == "surcharge" for item in with_colour.items)
    assert with_cut.total == 35


def test_hair_length_eligibility_follows_the_line_flag(price_engine):
    """Test that eligibility comes from the catalogue flag, not from the option id."""
    flagged = PricedLine("balayage", "Balayage", 70, 150, hair_length_surcharge_eligible=True)
    unflagged = PricedLine("full-colour", "Full Head Colour", 55, 120)

    with_flag = price_engine.compute_breakdown(
        BookingPriceInput(service=flagged, category="hairdressing", hair_length_surcharge=True)
    )
    without_flag = price_engine.compute_breakdown(
        BookingPriceInput(service=unflagged, category="hairdressing", hair_length_surcharge=True)
    )

    assert with_flag.total == 80
    assert without_flag.total == 55
    assert not any(item.kind == "surcharge" for item in without_flag.items)


def test_same_day_surcharge_respects_config():
    """Test that same-day bookings are free by default and charged when enabled."""
    data = BookingPriceInput(service=CUT, category="hairdressing", is_same_day=True)

    assert PriceEngine(DEFAULT_PRICING_CONFIG).compute_breakdown(data).total == 35

    enabled = replace(DEFAULT_PRICING_CONFIG, same_day=SameDaySurcharge(enabled=True, amount=10))
    assert PriceEngine(enabled).compute_breakdown(data).total == 45


def test_package_discount_is_negative_line(price_engine):
    """Test that a package is listed at its full price with the saving shown as a discount."""
    package = PricedLine("hair-and-help", "Hair & Help Package", 55, 120)
    breakdown = price_engine.compute_breakdown(
        BookingPriceInput(
            service=package,
            category="packages",
            package_discount=PriceBreakdownItem("Hair & Help Package saving", 5, "discount"),
        )
    )

    assert breakdown.items[-1].amount == -5
    assert breakdown.total == 50
    assert breakdown.savings == 5


def test_deposit_never_exceeds_total():
    """Test that a fixed deposit larger than the total is clamped to the total."""
    config = replace(DEFAULT_PRICING_CONFIG, minimum_charge=0)
    tiny = PricedLine("tiny", "Tiny", 10, 15)
    breakdown = PriceEngine(config).compute_breakdown(
        BookingPriceInput(service=tiny, category="hairdressing", is_new_client=True)
    )

    assert breakdown.deposit_required is True
    assert breakdown.deposit_amount == 10
