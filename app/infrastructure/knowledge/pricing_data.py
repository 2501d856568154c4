"""
Default pricing rules and the postcode distance table.

Service base is Sutton, Surrey (SM1). Distances are approximate road miles
used for quoting only.

Travel tiers:
- Core (0-6 miles): free
- Extended (6-10 miles): £5
- Distant (10-15 miles): £12
- Beyond 15 miles: enquiry only
"""

from __future__ import annotations

from app.domain.entities.pricing_config import (
    DepositConfig,
    DepositTrigger,
    GroupBookingRule,
    HairLengthSurcharge,
    PricingConfig,
    SameDaySurcharge,
    TravelTier,
)


DEFAULT_PRICING_CONFIG = PricingConfig(
    version="2026.01",
    minimum_charge=30,
    minimum_booking_minutes=60,
    minimum_booking_minutes_distant=90,
    distant_threshold_miles=10,
    core_radius_miles=6,
    travel_tiers=(
        TravelTier(
            id="core",
            label="Core Area (within 6 miles)",
            min_miles=0,
            max_miles=6,
            fee=0,
            areas="Sutton, Cheam, Belmont, Carshalton, Wallington, Worcester Park",
        ),
        TravelTier(
            id="extended",
            label="Extended Area (6-10 miles)",
            min_miles=6,
            max_miles=10,
            fee=5,
            areas="Morden, New Malden, Croydon outskirts, Kingston",
        ),
        TravelTier(
            id="distant",
            label="Distant Area (10-15 miles)",
            min_miles=10,
            max_miles=15,
            fee=12,
            areas="Wimbledon, Croydon town centre, Leatherhead",
        ),
    ),
    hair_length=HairLengthSurcharge(
        enabled=True,
        amount=10,
        label="Long/thick hair surcharge",
    ),
    same_day=SameDaySurcharge(enabled=False, amount=10, label="Same-day booking fee"),
    group_booking=GroupBookingRule(
        enabled=True,
        max_additional_clients=3,
        discount_per_client=5,
        applies_to=("hairdressing",),
    ),
    deposit=DepositConfig(
        enabled=True,
        amount=20,
        is_percentage=False,
        trigger=DepositTrigger.NEW_CLIENT_OR_COLOUR,
    ),
)


POSTCODE_DISTANCES: dict[str, float] = {
    # Core area
    "SM1": 0,  # Sutton (base)
    "SM2": 2,  # Belmont, Cheam Village
    "SM3": 2,  # Cheam, North Cheam
    "SM5": 3,  # Carshalton
    "SM6": 3,  # Wallington, Beddington
    "SM4": 4,  # Morden
    "KT4": 4,  # Worcester Park
    "SM7": 5,  # Banstead
    # Extended area
    "CR5": 6,  # Coulsdon
    "CR8": 6,  # Purley, Kenley
    "KT5": 7,  # Tolworth
    "KT3": 7,  # New Malden
    "KT9": 7,  # Chessington
    "KT17": 7,  # Ewell
    "CR2": 7,  # South Croydon
    "CR4": 7,  # Mitcham
    "KT18": 8,  # Epsom
    "KT19": 8,  # Ewell, Horton
    "CR0": 8,  # Croydon (outer)
    "CR9": 9,  # Croydon town centre
    "KT6": 9,  # Surbiton
    # Distant area
    "SW19": 10,  # Wimbledon
    "SW20": 10,  # Raynes Park
    "KT1": 10,  # Kingston town centre
    "KT2": 10,  # Kingston, Norbiton
    "SW17": 11,  # Tooting
    "SE25": 11,  # South Norwood
    "KT22": 12,  # Leatherhead
    "KT21": 12,  # Ashtead
    "SW16": 12,  # Streatham
    "SE19": 13,  # Crystal Palace
    "SE20": 13,  # Anerley, Penge
    "RH1": 14,  # Redhill
    "KT10": 14,  # Esher
    "SW4": 14,  # Clapham
    "SW11": 14,  # Battersea
    "RH2": 15,  # Reigate
    "KT11": 15,  # Cobham
    "KT12": 15,  # Walton-on-Thames
    # Central London: out of area
    "SW3": 18,
    "SW7": 18,
    "SE1": 18,
    "SW1": 20,
    "W1": 22,
    "WC1": 22,
    "EC1": 23,
}
