from __future__ import annotations

import asyncio
import logging

from app.application.dto.booking_request import BookingRequestDTO
from app.application.dto.enquiry_request import EnquiryRequestDTO
from app.application.exceptions import NotificationError
from app.application.ports.email_sender import EmailSenderPort
from app.domain.entities.area import AreaResolution
from app.domain.entities.email import EmailMessage
from app.domain.entities.price_breakdown import PriceBreakdown


REASON_LABELS = {
    "out-of-area": "Out of service area",
    "general": "General enquiry",
    "custom-request": "Custom request",
}


def _money(amount: float) -> str:
    return f"£{amount:,.2f}"


class BookingNotifier:
    """
    Sends the business notification, then the optional customer confirmation.

    Delivery is best-effort: failures and timeouts are logged with the
    reference and reported as False, never raised, so a booking is not lost
    over email trouble.
    """

    def __init__(
        self,
        sender: EmailSenderPort,
        business_email: str,
        from_email: str,
        business_name: str,
        business_phone: str = "",
        timeout_seconds: float = 10.0,
        send_customer_confirmation: bool = True,
    ) -> None:
        self._sender = sender
        self._business_email = business_email
        self._from_email = from_email
        self._business_name = business_name
        self._business_phone = business_phone
        self._timeout = timeout_seconds
        self._send_customer_confirmation = send_customer_confirmation
        self._logger = logging.getLogger(__name__)

    async def notify_booking(self, booking: BookingRequestDTO, breakdown: PriceBreakdown, reference: str) -> bool:
        messages = [self._booking_business_email(booking, breakdown, reference)]
        if self._send_customer_confirmation:
            messages.append(self._booking_customer_email(booking, breakdown, reference))
        return await self._deliver(messages, reference)

    async def notify_enquiry(
        self,
        enquiry: EnquiryRequestDTO,
        area: AreaResolution | None,
        reference: str,
    ) -> bool:
        messages = [self._enquiry_business_email(enquiry, area, reference)]
        if self._send_customer_confirmation:
            messages.append(self._enquiry_customer_email(enquiry, reference))
        return await self._deliver(messages, reference)

    async def _deliver(self, messages: list[EmailMessage], reference: str) -> bool:
        async def send_all() -> None:
            for message in messages:
                await self._sender.send(message)

        try:
            await asyncio.wait_for(send_all(), timeout=self._timeout)
        except asyncio.TimeoutError:
            self._logger.error(
                "Notification timed out",
                extra={"reference": reference, "error": f"timeout after {self._timeout}s"},
            )
            return False
        except NotificationError as e:
            self._logger.error("Notification failed", extra={"reference": reference, "error": str(e)})
            return False
        except Exception as e:
            self._logger.exception("Unexpected notification error", extra={"reference": reference, "error": str(e)})
            return False
        return True

    def _breakdown_lines(self, breakdown: PriceBreakdown) -> list[str]:
        return [f"  {item.label}: {_money(item.amount)}" for item in breakdown.items]

    def _booking_business_email(
        self, booking: BookingRequestDTO, breakdown: PriceBreakdown, reference: str
    ) -> EmailMessage:
        lines = [
            f"New Booking Request - {reference}",
            "",
            f"Client: {booking.client_name}",
            f"Email: {booking.client_email}",
            f"Phone: {booking.client_phone}",
            "NEW CLIENT" if booking.is_new_client else "Returning client",
            "",
            f"Date: {booking.selected_date.isoformat()}",
            f"Time: {booking.selected_time}",
            f"Location: {booking.address}, {booking.postcode}",
            "",
            "Price breakdown:",
            *self._breakdown_lines(breakdown),
            f"Total: {_money(breakdown.total)}",
            f"Duration: ~{breakdown.estimated_duration_minutes} minutes",
            (
                f"Deposit required: {_money(breakdown.deposit_amount)}"
                if breakdown.deposit_required
                else "No deposit required"
            ),
        ]
        if booking.special_requests:
            lines += ["", "Special requests:", booking.special_requests]
        return EmailMessage(
            to=self._business_email,
            from_email=self._from_email,
            from_name=self._business_name,
            subject=f"New Booking: {booking.client_name} - {booking.selected_date.isoformat()} at {booking.selected_time}",
            text="\n".join(lines),
            reply_to=str(booking.client_email),
        )

    def _booking_customer_email(
        self, booking: BookingRequestDTO, breakdown: PriceBreakdown, reference: str
    ) -> EmailMessage:
        first_name = booking.client_name.split(" ")[0]
        lines = [
            f"Hi {first_name},",
            "",
            "Thank you for your booking request! Here are your details:",
            "",
            f"Reference: {reference}",
            f"Date: {booking.selected_date.isoformat()}",
            f"Time: {booking.selected_time}",
            f"Address: {booking.address}, {booking.postcode}",
            "",
            *self._breakdown_lines(breakdown),
            f"Total: {_money(breakdown.total)}",
        ]
        if breakdown.deposit_required:
            lines += [
                "",
                f"A deposit of {_money(breakdown.deposit_amount)} is required to secure your appointment. "
                "We'll be in touch with payment details shortly.",
            ]
        lines += [
            "",
            "We'll confirm your appointment within 24 hours.",
            "",
            self._business_name,
            self._business_phone,
        ]
        return EmailMessage(
            to=str(booking.client_email),
            from_email=self._from_email,
            from_name=self._business_name,
            subject=f"Booking Request Received - {reference}",
            text="\n".join(lines),
        )

    def _enquiry_business_email(
        self, enquiry: EnquiryRequestDTO, area: AreaResolution | None, reference: str
    ) -> EmailMessage:
        lines = [
            f"New Enquiry - {reference}",
            "",
            f"Type: {REASON_LABELS.get(enquiry.reason, enquiry.reason)}",
            f"From: {enquiry.client_name}",
            f"Email: {enquiry.client_email}",
            f"Phone: {enquiry.client_phone}",
            f"Postcode: {enquiry.postcode}",
        ]
        if area is not None:
            distance = f"{area.distance_miles:g} miles" if area.distance_miles is not None else "unknown distance"
            lines.append(f"Area: {area.tier.label} ({distance})")
        if enquiry.address:
            lines.append(f"Address: {enquiry.address}")
        if enquiry.service_name:
            lines.append(f"Interested in: {enquiry.service_name}")
        if enquiry.preferred_date or enquiry.preferred_time:
            lines.append(f"Preferred: {enquiry.preferred_date or '-'} {enquiry.preferred_time or ''}".rstrip())
        lines += ["", "Message:", enquiry.message]
        return EmailMessage(
            to=self._business_email,
            from_email=self._from_email,
            from_name=self._business_name,
            subject=f"[{enquiry.reason.upper()}] Enquiry from {enquiry.client_name}",
            text="\n".join(lines),
            reply_to=str(enquiry.client_email),
        )

    def _enquiry_customer_email(self, enquiry: EnquiryRequestDTO, reference: str) -> EmailMessage:
        first_name = enquiry.client_name.split(" ")[0]
        lines = [
            f"Hi {first_name},",
            "",
            "Thank you for getting in touch! We've received your enquiry and will reply within 24 hours.",
            "",
            f"Reference: {reference}",
            "",
            "Your message:",
            f'"{enquiry.message}"',
            "",
            self._business_name,
            self._business_phone,
        ]
        return EmailMessage(
            to=str(enquiry.client_email),
            from_email=self._from_email,
            from_name=self._business_name,
            subject=f"Thanks for your enquiry - {reference}",
            text="\n".join(lines),
        )
