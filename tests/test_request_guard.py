from __future__ import annotations

import pytest

from app.application.dto.booking_request import BookingRequestDTO
from app.application.dto.enquiry_request import EnquiryRequestDTO
from app.application.exceptions import RateLimited, SpamDetected, ValidationFailed
from app.application.use_cases.request_guard import RequestGuard


def test_valid_booking_is_admitted(rate_limit_store, booking_payload):
    """Test that a valid body comes back as the typed request."""
    guard = RequestGuard(rate_limit_store)

    booking = guard.admit(booking_payload(), "1.2.3.4", BookingRequestDTO, scope="booking")

    assert booking.selected_option == "cut-blow-dry"
    assert booking.client_email == "jane@example.com"
    assert booking.is_new_client is True


def test_honeypot_is_spam(rate_limit_store, booking_payload):
    """Test that a populated website field short-circuits before validation."""
    guard = RequestGuard(rate_limit_store)

    with pytest.raises(SpamDetected):
        guard.admit({"website": "http://spam.example"}, "1.2.3.4", BookingRequestDTO, scope="booking")

    assert RequestGuard.is_spam(booking_payload(website="")) is False
    assert RequestGuard.is_spam(booking_payload(website="   ")) is False


def test_rate_limit_checked_first(rate_limit_store, booking_payload):
    """Test that the fourth request is refused even if it is spam or invalid."""
    guard = RequestGuard(rate_limit_store, max_requests=3, window_seconds=60)
    for _ in range(3):
        guard.admit(booking_payload(), "9.9.9.9", BookingRequestDTO, scope="booking")

    with pytest.raises(RateLimited):
        guard.admit({"website": "spam"}, "9.9.9.9", BookingRequestDTO, scope="booking")


def test_scopes_have_separate_budgets(rate_limit_store, booking_payload, enquiry_payload):
    guard = RequestGuard(rate_limit_store, max_requests=1, window_seconds=60)
    guard.admit(booking_payload(), "5.5.5.5", BookingRequestDTO, scope="booking")

    enquiry = guard.admit(enquiry_payload(), "5.5.5.5", EnquiryRequestDTO, scope="enquiry")

    assert enquiry.reason == "out-of-area"


def test_non_object_body_fails_validation(rate_limit_store):
    guard = RequestGuard(rate_limit_store)

    with pytest.raises(ValidationFailed) as exc:
        guard.admit(["not", "an", "object"], "1.2.3.4", BookingRequestDTO, scope="booking")

    assert "body" in exc.value.details


def test_validation_details_are_keyed_by_request_field(rate_limit_store, booking_payload):
    """Test that field errors use the camelCase request names and readable messages."""
    guard = RequestGuard(rate_limit_store)
    body = booking_payload(clientEmail="not-an-email", consentBoundaries=False, clientPhone="123")
    del body["address"]

    with pytest.raises(ValidationFailed) as exc:
        guard.admit(body, "1.2.3.4", BookingRequestDTO, scope="booking")

    details = exc.value.details
    assert set(details) >= {"clientEmail", "consentBoundaries", "clientPhone", "address"}
    assert details["consentBoundaries"] == ["You must acknowledge the service boundaries"]


def test_nested_item_errors_are_prefixed(rate_limit_store, booking_payload):
    guard = RequestGuard(rate_limit_store)
    body = booking_payload(addOns=[{"id": "deep-conditioning", "price": -1}])

    with pytest.raises(ValidationFailed) as exc:
        guard.admit(body, "1.2.3.4", BookingRequestDTO, scope="booking")

    assert exc.value.details["addOns"][0].startswith("0.price:")


def test_enquiry_reason_must_be_known(rate_limit_store, enquiry_payload):
    guard = RequestGuard(rate_limit_store)

    with pytest.raises(ValidationFailed) as exc:
        guard.admit(enquiry_payload(reason="complaint"), "1.2.3.4", EnquiryRequestDTO, scope="enquiry")

    assert "reason" in exc.value.details
