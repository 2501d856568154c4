from __future__ import annotations

from app.domain.entities.service_catalog import ServiceOption, ServicePackage


_TIME_BASED = {
    "is_time_based": True,
    "hourly_rate": 20,
    "min_duration_minutes": 60,
    "increment_minutes": 30,
    "max_duration_minutes": 180,
}

_OPTIONS: list[ServiceOption] = [
    # Hairdressing: cutting
    ServiceOption("cut-blow-dry", "Cut & Blow-Dry", "hairdressing", 35, 60),
    ServiceOption("dry-trim", "Dry Trim (No Wash)", "hairdressing", 20, 30),
    ServiceOption("wash-blow-dry", "Wash & Blow-Dry", "hairdressing", 25, 45),
    ServiceOption("restyle-cut", "Restyle Cut", "hairdressing", 45, 75),
    ServiceOption("childs-cut", "Child's Haircut (Under 12)", "hairdressing", 18, 30),
    # Hairdressing: colour
    ServiceOption(
        "root-colour", "Root Colour Touch-Up", "hairdressing", 40, 90,
        hair_length_surcharge_eligible=True, is_colour=True,
    ),
    ServiceOption(
        "full-colour", "Full Head Colour", "hairdressing", 55, 120,
        hair_length_surcharge_eligible=True, is_colour=True,
    ),
    ServiceOption(
        "partial-highlights", "Partial Highlights / Foils", "hairdressing", 60, 150,
        hair_length_surcharge_eligible=True, is_colour=True,
    ),
    ServiceOption(
        "full-highlights", "Full Head Highlights", "hairdressing", 80, 180,
        hair_length_surcharge_eligible=True, is_colour=True,
    ),
    # Hairdressing: add-ons
    ServiceOption(
        "deep-conditioning", "Deep Conditioning Treatment", "hairdressing", 10, 15,
        is_add_on=True, add_on_for=("hairdressing",),
    ),
    # Companionship
    ServiceOption("companion-1hr", "1 Hour Visit", "companionship", 20, 60, **_TIME_BASED),
    ServiceOption("companion-90min", "90 Minute Visit", "companionship", 30, 90, **_TIME_BASED),
    ServiceOption("companion-2hr", "2 Hour Visit", "companionship", 40, 120, **_TIME_BASED),
    ServiceOption("companion-custom", "Custom Duration", "companionship", 20, 60, **_TIME_BASED),
    # Errands
    ServiceOption("errands-1hr", "1 Hour", "errands", 20, 60, **_TIME_BASED),
    ServiceOption("errands-2hr", "2 Hours", "errands", 40, 120, **_TIME_BASED),
    ServiceOption("errands-custom", "Custom Duration", "errands", 20, 60, **_TIME_BASED),
]

SERVICE_OPTIONS: dict[str, ServiceOption] = {option.id: option for option in _OPTIONS}

_PACKAGES: list[ServicePackage] = [
    ServicePackage("hair-and-help", "Hair & Help Package", 50, 55, 120),
    ServicePackage("pamper-morning", "Pamper Morning", 75, 85, 180),
    ServicePackage("weekly-companion", "Weekly Friendship", 70, 80, 60),
    ServicePackage("fortnightly-errands", "Fortnightly Errands", 35, 40, 60),
    ServicePackage("monthly-maintenance", "Monthly Hair Maintenance", 75, 80, 90),
    ServicePackage("complete-care", "Complete Care Package", 110, 130, 60),
]

SERVICE_PACKAGES: dict[str, ServicePackage] = {package.id: package for package in _PACKAGES}
