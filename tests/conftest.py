from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from app.application.ports.email_sender import EmailSenderPort
from app.application.use_cases.notify import BookingNotifier
from app.application.use_cases.price_engine import PriceEngine
from app.application.use_cases.references import ReferenceGenerator
from app.application.use_cases.request_guard import RequestGuard
from app.application.use_cases.resolve_area import AreaResolver
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.application.use_cases.submit_enquiry import SubmitEnquiryUseCase
from app.domain.entities.email import EmailMessage
from app.infrastructure.knowledge.pricing_data import DEFAULT_PRICING_CONFIG, POSTCODE_DISTANCES
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.store.memory_rate_limit_store import MemoryRateLimitStore
from app.main import app
from app.wiring.dependencies import (
    get_area_resolver,
    get_submit_booking_use_case,
    get_submit_enquiry_use_case,
)


TODAY = date(2026, 3, 2)
NOW = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)


class RecordingEmailSender(EmailSenderPort):
    """Keeps every message in memory; optionally fails every send."""

    def __init__(self, error: Exception | None = None) -> None:
        self.sent: list[EmailMessage] = []
        self._error = error

    async def send(self, message: EmailMessage) -> str | None:
        if self._error is not None:
            raise self._error
        self.sent.append(message)
        return f"test-{len(self.sent)}"


@pytest.fixture
def area_resolver() -> AreaResolver:
    return AreaResolver(config=DEFAULT_PRICING_CONFIG, distances=POSTCODE_DISTANCES)


@pytest.fixture
def price_engine() -> PriceEngine:
    return PriceEngine(config=DEFAULT_PRICING_CONFIG)


@pytest.fixture
def rate_limit_store() -> MemoryRateLimitStore:
    return MemoryRateLimitStore()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def notifier(email_sender: RecordingEmailSender) -> BookingNotifier:
    return BookingNotifier(
        sender=email_sender,
        business_email="owner@example.com",
        from_email="bookings@example.com",
        business_name="Test Salon",
        business_phone="07000 000000",
        timeout_seconds=2,
    )


@pytest.fixture
def booking_use_case(
    rate_limit_store: MemoryRateLimitStore,
    area_resolver: AreaResolver,
    price_engine: PriceEngine,
    notifier: BookingNotifier,
) -> SubmitBookingUseCase:
    return SubmitBookingUseCase(
        guard=RequestGuard(store=rate_limit_store, max_requests=3, window_seconds=60),
        area_resolver=area_resolver,
        catalog=ServiceCatalogStore(),
        price_engine=price_engine,
        references=ReferenceGenerator(clock=lambda: NOW),
        notifier=notifier,
        timezone=ZoneInfo("Europe/London"),
        today=lambda: TODAY,
    )


@pytest.fixture
def enquiry_use_case(
    rate_limit_store: MemoryRateLimitStore,
    area_resolver: AreaResolver,
    notifier: BookingNotifier,
) -> SubmitEnquiryUseCase:
    return SubmitEnquiryUseCase(
        guard=RequestGuard(store=rate_limit_store, max_requests=3, window_seconds=60),
        area_resolver=area_resolver,
        references=ReferenceGenerator(clock=lambda: NOW),
        notifier=notifier,
    )


@pytest.fixture
def client(booking_use_case, enquiry_use_case, area_resolver):
    app.dependency_overrides[get_submit_booking_use_case] = lambda: booking_use_case
    app.dependency_overrides[get_submit_enquiry_use_case] = lambda: enquiry_use_case
    app.dependency_overrides[get_area_resolver] = lambda: area_resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def booking_payload():
    """Valid Cut & Blow-Dry booking in the core area; pass keyword overrides to vary it."""

    def build(**overrides):
        payload = {
            "website": "",
            "serviceType": "hairdressing",
            "selectedOption": "cut-blow-dry",
            "serviceName": "Hairdressing",
            "optionName": "Cut & Blow-Dry",
            "addOns": [],
            "hairLengthSurcharge": False,
            "additionalClients": [],
            "postcode": "SM1 1AA",
            "address": "12 High Street, Sutton",
            "selectedDate": "2026-03-10",
            "selectedTime": "10:00",
            "isSameDay": False,
            "clientName": "Jane Smith",
            "clientEmail": "jane@example.com",
            "clientPhone": "07123456789",
            "specialRequests": "",
            "isNewClient": True,
            "isColourService": False,
            "consentBoundaries": True,
            "consentCancellation": True,
            "consentWomenOnly": True,
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def enquiry_payload():
    def build(**overrides):
        payload = {
            "website": "",
            "postcode": "SW1A 1AA",
            "clientName": "Mary Jones",
            "clientEmail": "mary@example.com",
            "clientPhone": "07987654321",
            "message": "I would like to enquire about booking an appointment",
            "reason": "out-of-area",
        }
        payload.update(overrides)
        return payload

    return build
