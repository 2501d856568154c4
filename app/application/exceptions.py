from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.entities.area import AreaResolution


class BookingRejected(Exception):
    """Base class for requests turned away before a reference is issued."""
    pass


class ValidationFailed(BookingRejected):
    """Raised when the request body is malformed or refers to unknown catalogue IDs."""

    def __init__(self, details: dict[str, list[str]], message: str = "Invalid request data") -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class SpamDetected(BookingRejected):
    """Raised when the honeypot field arrives populated."""
    pass


class RateLimited(BookingRejected):
    """Raised when a source exceeds its request budget for the window."""
    pass


class OutOfServiceArea(BookingRejected):
    """Raised when the postcode resolves to an enquiry-only tier."""

    def __init__(self, resolution: "AreaResolution") -> None:
        super().__init__(resolution.message)
        self.resolution = resolution


class NotificationError(RuntimeError):
    """Raised by email senders when delivery fails (network errors, provider rejections)."""
    pass


class PricingConfigError(ValueError):
    """Raised when the pricing configuration is inconsistent (gaps, overlaps, negative fees)."""
    pass
