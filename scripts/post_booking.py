#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from datetime import date, timedelta
from typing import Any

import httpx
from httpx import ConnectError


def build_booking(postcode: str, option: str, website: str) -> dict[str, Any]:
    return {
        "website": website,
        "serviceType": "hairdressing",
        "selectedOption": option,
        "serviceName": "Hairdressing",
        "optionName": option,
        "addOns": [],
        "hairLengthSurcharge": False,
        "additionalClients": [],
        "postcode": postcode,
        "address": "12 High Street, Sutton",
        "selectedDate": (date.today() + timedelta(days=7)).isoformat(),
        "selectedTime": "10:00",
        "isSameDay": False,
        "clientName": "Test Client",
        "clientEmail": "test.client@example.com",
        "clientPhone": "07123456789",
        "isNewClient": True,
        "consentBoundaries": True,
        "consentCancellation": True,
        "consentWomenOnly": True,
        # Deliberately wrong: the server must ignore it
        "total": 1,
    }


def build_enquiry(postcode: str, website: str) -> dict[str, Any]:
    return {
        "website": website,
        "postcode": postcode,
        "clientName": "Test Client",
        "clientEmail": "test.client@example.com",
        "clientPhone": "07123456789",
        "message": "Do you ever travel this far for a colour appointment?",
        "reason": "out-of-area",
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Send test requests to a running booking API")
    parser.add_argument("--url", default="http://127.0.0.1:8001")
    parser.add_argument("--endpoint", choices=["booking", "enquiry", "check-postcode"], default="booking")
    parser.add_argument("--postcode", default="SM1 1AA")
    parser.add_argument("--option", default="cut-blow-dry")
    parser.add_argument("--spam", action="store_true", help="Fill the honeypot field")
    parser.add_argument("--repeat", type=int, default=1, help="Send N times (rate limit check)")
    args = parser.parse_args()

    website = "http://spam.example" if args.spam else ""
    if args.endpoint == "booking":
        payload = build_booking(args.postcode, args.option, website)
    elif args.endpoint == "enquiry":
        payload = build_enquiry(args.postcode, website)
    else:
        payload = {"postcode": args.postcode}

    url = f"{args.url.rstrip('/')}/{args.endpoint}"
    for attempt in range(1, args.repeat + 1):
        try:
            response = httpx.post(url, json=payload, timeout=30.0)
        except ConnectError:
            print(f"Could not connect to {url}. Is the server running?")
            return
        print(f"[{attempt}] {response.status_code}")
        try:
            print(json.dumps(response.json(), indent=2))
        except ValueError:
            print(response.text)


if __name__ == "__main__":
    main()
