from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable
from zoneinfo import ZoneInfo

from app.application.dto.booking_request import BookingRequestDTO
from app.application.exceptions import OutOfServiceArea, SpamDetected, ValidationFailed
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.use_cases.notify import BookingNotifier
from app.application.use_cases.price_engine import PriceEngine
from app.application.use_cases.references import ReferenceGenerator
from app.application.use_cases.request_guard import RequestGuard
from app.application.use_cases.resolve_area import AreaResolver
from app.domain.entities.area import AreaResolution
from app.domain.entities.price_breakdown import (
    BookingPriceInput,
    PriceBreakdown,
    PriceBreakdownItem,
    PricedLine,
)
from app.domain.entities.reference import SPAM_SENTINEL_REFERENCE, ReferencePrefix
from app.domain.entities.service_catalog import ServiceOption


MAX_TIME_BASED_MINUTES = 180


@dataclass(frozen=True)
class BookingOutcome:
    reference: str
    breakdown: PriceBreakdown | None
    area: AreaResolution | None
    notified: bool
    spam: bool = False


@dataclass(frozen=True)
class _ResolvedBase:
    line: PricedLine
    category: str
    option: ServiceOption | None
    package_discount: PriceBreakdownItem | None = None


class SubmitBookingUseCase:
    """
    Single pass: guard -> area -> price -> reference -> notify.

    Every price is re-derived from the catalogue; any totals in the request
    are only compared against the server result and logged when they differ.
    """

    SCOPE = "booking"

    def __init__(
        self,
        guard: RequestGuard,
        area_resolver: AreaResolver,
        catalog: ServiceCatalogPort,
        price_engine: PriceEngine,
        references: ReferenceGenerator,
        notifier: BookingNotifier,
        timezone: ZoneInfo,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._guard = guard
        self._area_resolver = area_resolver
        self._catalog = catalog
        self._price_engine = price_engine
        self._references = references
        self._notifier = notifier
        self._timezone = timezone
        self._today = today or (lambda: datetime.now(self._timezone).date())
        self._logger = logging.getLogger(__name__)

    async def execute(self, raw_body: Any, source_ip: str) -> BookingOutcome:
        try:
            booking = self._guard.admit(raw_body, source_ip, BookingRequestDTO, scope=self.SCOPE)
        except SpamDetected:
            return BookingOutcome(
                reference=SPAM_SENTINEL_REFERENCE,
                breakdown=None,
                area=None,
                notified=False,
                spam=True,
            )

        area = self._area_resolver.resolve(booking.postcode)
        if area.enquiry_only:
            self._logger.info(
                "Booking rejected: outside service area",
                extra={"postcode": area.normalized_postcode, "district": area.district, "ip": source_ip},
            )
            raise OutOfServiceArea(area)

        breakdown = self.quote(booking, area)
        self._log_client_mismatch(booking, breakdown, area)

        reference = self._references.generate(ReferencePrefix.BOOKING)
        notified = await self._notifier.notify_booking(booking, breakdown, reference)

        self._logger.info(
            "Booking accepted",
            extra={
                "reference": reference,
                "postcode": area.normalized_postcode,
                "total": breakdown.total,
                "reason": "notified" if notified else "notification_failed",
            },
        )
        return BookingOutcome(
            reference=reference,
            breakdown=breakdown,
            area=area,
            notified=notified,
        )

    def quote(self, booking: BookingRequestDTO, area: AreaResolution) -> PriceBreakdown:
        """Authoritative price for a validated booking in a serviceable area."""
        base = self._resolve_base(booking)
        add_ons = self._resolve_add_ons(booking, base.category)
        additional = self._resolve_additional_clients(booking)

        is_colour = booking.is_colour_service or bool(base.option and base.option.is_colour)
        is_same_day = booking.is_same_day or booking.selected_date == self._today()

        price_input = BookingPriceInput(
            service=base.line,
            category=base.category,
            add_ons=add_ons,
            additional_clients=additional,
            hair_length_surcharge=booking.hair_length_surcharge,
            is_same_day=is_same_day,
            is_new_client=booking.is_new_client,
            is_colour_service=is_colour,
            travel_fee=area.travel_fee,
            package_discount=base.package_discount,
        )
        return self._price_engine.compute_breakdown(price_input)

    def _resolve_base(self, booking: BookingRequestDTO) -> _ResolvedBase:
        if booking.service_type == "packages":
            package = self._catalog.get_package(booking.selected_option)
            if package is None:
                raise ValidationFailed({"selectedOption": ["Unknown package"]})
            duration = package.duration_minutes or self._price_engine.config.minimum_booking_minutes
            discount = None
            if package.savings > 0:
                discount = PriceBreakdownItem(f"{package.name} saving", package.savings, "discount")
            return _ResolvedBase(
                line=PricedLine(package.id, package.name, package.original_price, duration),
                category="packages",
                option=None,
                package_discount=discount,
            )

        option = self._catalog.get_option(booking.selected_option)
        if option is None or option.is_add_on or option.category != booking.service_type:
            raise ValidationFailed({"selectedOption": ["Unknown service option for this service type"]})

        if not option.is_time_based:
            return _ResolvedBase(
                line=PricedLine(
                    option.id,
                    option.name,
                    option.price,
                    option.duration_minutes,
                    hair_length_surcharge_eligible=option.hair_length_surcharge_eligible,
                ),
                category=option.category,
                option=option,
            )

        minutes = option.duration_minutes
        if booking.time_based_selection is not None:
            minutes = round(booking.time_based_selection.hours * 60)
        increment = option.increment_minutes or 30
        if minutes % increment:
            raise ValidationFailed(
                {"timeBasedSelection": [f"Duration must be in {increment}-minute increments"]}
            )
        longest = option.max_duration_minutes or MAX_TIME_BASED_MINUTES
        if minutes > longest:
            raise ValidationFailed(
                {"timeBasedSelection": [f"Duration cannot exceed {longest / 60:g} hours"]}
            )
        minutes = max(minutes, option.min_duration_minutes or 0)
        name = option.name if minutes == option.duration_minutes else f"{option.name} ({minutes / 60:g} hrs)"
        return _ResolvedBase(
            line=PricedLine(option.id, name, _time_based_price(option, minutes), minutes),
            category=option.category,
            option=option,
        )

    def _resolve_add_ons(self, booking: BookingRequestDTO, category: str) -> tuple[PricedLine, ...]:
        allowed = {option.id: option for option in self._catalog.get_add_ons_for(category)}
        lines: list[PricedLine] = []
        errors: list[str] = []
        for index, item in enumerate(booking.add_ons):
            option = allowed.get(item.id.lower())
            if option is None:
                errors.append(f"{index}: '{item.id}' is not an add-on for this service")
                continue
            if item.price != option.price:
                self._logger.warning(
                    "Client add-on price differs from catalogue",
                    extra={"reason": option.id, "total": item.price},
                )
            lines.append(PricedLine(option.id, option.name, option.price, option.duration_minutes))
        if errors:
            raise ValidationFailed({"addOns": errors})
        return tuple(lines)

    def _resolve_additional_clients(self, booking: BookingRequestDTO) -> tuple[PricedLine, ...]:
        limit = self._price_engine.config.group_booking.max_additional_clients
        if len(booking.additional_clients) > limit:
            raise ValidationFailed(
                {"additionalClients": [f"At most {limit} additional clients can be booked together"]}
            )

        lines: list[PricedLine] = []
        errors: list[str] = []
        for index, item in enumerate(booking.additional_clients):
            option = self._catalog.get_option(item.service_id)
            if option is None or option.is_add_on:
                errors.append(f"{index}: unknown service '{item.service_id}'")
                continue
            price = _time_based_price(option, option.duration_minutes) if option.is_time_based else option.price
            if item.price != price:
                self._logger.warning(
                    "Client additional-client price differs from catalogue",
                    extra={"reason": option.id, "total": item.price},
                )
            lines.append(PricedLine(option.id, option.name, price, option.duration_minutes))
        if errors:
            raise ValidationFailed({"additionalClients": errors})
        return tuple(lines)

    def _log_client_mismatch(self, booking: BookingRequestDTO, breakdown: PriceBreakdown, area: AreaResolution) -> None:
        submitted = {
            "total": (booking.total, breakdown.total),
            "depositRequired": (booking.deposit_required, breakdown.deposit_required),
            "depositAmount": (booking.deposit_amount, breakdown.deposit_amount),
            "estimatedDuration": (booking.estimated_duration, breakdown.estimated_duration_minutes),
            "travelFee": (booking.travel_fee, area.travel_fee),
        }
        mismatched = [
            name
            for name, (client_value, server_value) in submitted.items()
            if client_value is not None and abs(client_value - server_value) > 0.005
        ]
        if mismatched:
            self._logger.warning(
                "Client-submitted pricing differs from server quote",
                extra={
                    "reason": ",".join(mismatched),
                    "total": breakdown.total,
                    "postcode": area.normalized_postcode,
                },
            )


def _time_based_price(option: ServiceOption, minutes: int) -> float:
    if not option.hourly_rate:
        return option.price
    billable = max(minutes, option.min_duration_minutes or 0)
    return round(option.hourly_rate * billable / 60, 2)
