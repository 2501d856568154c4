from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.email_sender import EmailSenderPort
from app.application.ports.rate_limit_store import RateLimitStorePort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.use_cases.notify import BookingNotifier
from app.application.use_cases.price_engine import PriceEngine
from app.application.use_cases.references import ReferenceGenerator
from app.application.use_cases.request_guard import RequestGuard
from app.application.use_cases.resolve_area import AreaResolver
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.application.use_cases.submit_enquiry import SubmitEnquiryUseCase
from app.domain.entities.pricing_config import PricingConfig
from app.infrastructure.email.console_sender import ConsoleEmailSender
from app.infrastructure.email.resend_sender import ResendEmailSender
from app.infrastructure.knowledge.pricing_data import POSTCODE_DISTANCES
from app.infrastructure.knowledge.pricing_store import load_pricing_config
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.store.memory_rate_limit_store import MemoryRateLimitStore


_rate_limit_store: MemoryRateLimitStore | None = None
_email_sender: EmailSenderPort | None = None


@lru_cache
def get_pricing_config() -> PricingConfig:
    return load_pricing_config(settings.PRICING_CONFIG_PATH)


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


def get_area_resolver() -> AreaResolver:
    return AreaResolver(config=get_pricing_config(), distances=POSTCODE_DISTANCES)


def get_price_engine() -> PriceEngine:
    return PriceEngine(config=get_pricing_config())


def get_rate_limit_store() -> RateLimitStorePort:
    global _rate_limit_store
    if _rate_limit_store is None:
        _rate_limit_store = MemoryRateLimitStore()
    return _rate_limit_store


def get_request_guard() -> RequestGuard:
    return RequestGuard(
        store=get_rate_limit_store(),
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )


def get_email_sender() -> EmailSenderPort:
    global _email_sender
    if _email_sender is None:
        _email_sender = _build_email_sender()
    return _email_sender


def _build_email_sender() -> EmailSenderPort:
    logger = logging.getLogger(__name__)
    if settings.RESEND_API_KEY and settings.RESEND_API_KEY.strip():
        logger.info("Using ResendEmailSender")
        return ResendEmailSender(
            api_key=settings.RESEND_API_KEY,
            api_url=settings.RESEND_API_URL,
            timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
        )
    logger.info("Using ConsoleEmailSender (RESEND_API_KEY missing, ENV=%s)", settings.ENV)
    return ConsoleEmailSender()


async def close_email_sender() -> None:
    """Releases the HTTP client of a sender built during this process. Never builds one."""
    global _email_sender
    sender, _email_sender = _email_sender, None
    if isinstance(sender, ResendEmailSender):
        await sender.aclose()


def get_notifier() -> BookingNotifier:
    return BookingNotifier(
        sender=get_email_sender(),
        business_email=settings.BUSINESS_EMAIL,
        from_email=settings.FROM_EMAIL,
        business_name=settings.BUSINESS_NAME,
        business_phone=settings.BUSINESS_PHONE,
        timeout_seconds=settings.NOTIFICATION_TIMEOUT_SECONDS,
        send_customer_confirmation=settings.SEND_CUSTOMER_CONFIRMATION,
    )


def get_reference_generator() -> ReferenceGenerator:
    return ReferenceGenerator()


def get_submit_booking_use_case() -> SubmitBookingUseCase:
    return SubmitBookingUseCase(
        guard=get_request_guard(),
        area_resolver=get_area_resolver(),
        catalog=get_service_catalog(),
        price_engine=get_price_engine(),
        references=get_reference_generator(),
        notifier=get_notifier(),
        timezone=ZoneInfo(settings.BUSINESS_TIMEZONE),
    )


def get_submit_enquiry_use_case() -> SubmitEnquiryUseCase:
    return SubmitEnquiryUseCase(
        guard=get_request_guard(),
        area_resolver=get_area_resolver(),
        references=get_reference_generator(),
        notifier=get_notifier(),
    )
