#!/usr/bin/env python3
"""
Local quote harness (no HTTP, no email).

Usage:
  python3 scripts/quote_local.py --postcode "KT3 4AB" --option cut-blow-dry
  python3 scripts/quote_local.py --type companionship --option companion-custom --hours 2.5

What it does:
- Resolves the postcode to a travel tier
- Prices the selection through the same use case the API uses
- Prints the itemised breakdown and deposit decision
"""

from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv()

from app.application.dto.booking_request import SERVICE_TYPES, BookingRequestDTO  # noqa: E402
from app.application.exceptions import ValidationFailed  # noqa: E402
from app.wiring.dependencies import get_area_resolver, get_submit_booking_use_case  # noqa: E402


def _build_booking(args: argparse.Namespace) -> BookingRequestDTO:
    payload = {
        "serviceType": args.type,
        "selectedOption": args.option,
        "serviceName": args.type,
        "optionName": args.option,
        "addOns": [{"id": add_on} for add_on in args.add_on],
        "additionalClients": [{"serviceId": extra} for extra in args.extra_client],
        "hairLengthSurcharge": args.long_hair,
        "postcode": args.postcode,
        "address": "1 Local Test Road",
        "selectedDate": (date.today() + timedelta(days=7)).isoformat(),
        "selectedTime": "10:00",
        "clientName": "Local Test",
        "clientEmail": "local@example.com",
        "clientPhone": "07000000000",
        "isNewClient": not args.returning,
        "consentBoundaries": True,
        "consentCancellation": True,
        "consentWomenOnly": True,
    }
    if args.hours:
        payload["timeBasedSelection"] = {"hours": args.hours}
    return BookingRequestDTO.model_validate(payload)


def main() -> int:
    parser = argparse.ArgumentParser(description="Print a server-side quote for a booking")
    parser.add_argument("--postcode", default="SM1 1AA")
    parser.add_argument("--type", default="hairdressing", choices=SERVICE_TYPES)
    parser.add_argument("--option", default="cut-blow-dry")
    parser.add_argument("--hours", type=float, default=None)
    parser.add_argument("--add-on", action="append", default=[])
    parser.add_argument("--extra-client", action="append", default=[])
    parser.add_argument("--long-hair", action="store_true")
    parser.add_argument("--returning", action="store_true", help="Returning client (no new-client deposit)")
    args = parser.parse_args()

    area = get_area_resolver().resolve(args.postcode)
    print(f"\n{area.normalized_postcode} -> {area.district} | {area.tier.label}")
    print(area.message)
    if area.enquiry_only:
        print("Enquiry only: no quote available.")
        return 1

    try:
        breakdown = get_submit_booking_use_case().quote(_build_booking(args), area)
    except ValidationFailed as e:
        print(f"Invalid selection: {e.details}")
        return 2

    print("-" * 60)
    for item in breakdown.items:
        print(f"{item.label:<44} {item.amount:>8.2f}  [{item.kind}]")
    print("-" * 60)
    print(f"{'Total':<44} {breakdown.total:>8.2f}")
    if breakdown.deposit_required:
        print(f"{'Deposit':<44} {breakdown.deposit_amount:>8.2f}")
    print(f"Duration: ~{breakdown.estimated_duration_minutes} min (pricing {breakdown.config_version})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
