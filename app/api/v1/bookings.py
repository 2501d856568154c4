from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from app.api.v1.schemas import (
    BookingResponseSchema,
    BreakdownItemSchema,
    BreakdownSchema,
    EnquiryResponseSchema,
    PostcodeCheckResponseSchema,
)
from app.application.dto.enquiry_request import PostcodeCheckDTO
from app.application.exceptions import OutOfServiceArea, RateLimited, ValidationFailed
from app.application.use_cases.request_guard import flatten_validation_errors
from app.application.use_cases.resolve_area import AreaResolver
from app.application.use_cases.submit_booking import BookingOutcome, SubmitBookingUseCase
from app.application.use_cases.submit_enquiry import SubmitEnquiryUseCase
from app.application.utils.postcode import format_postcode
from app.wiring.dependencies import (
    get_area_resolver,
    get_submit_booking_use_case,
    get_submit_enquiry_use_case,
)


router = APIRouter()
logger = logging.getLogger(__name__)

BOOKING_RECEIVED = "Booking request received successfully"
ENQUIRY_RECEIVED = "Enquiry received successfully"
TOO_MANY_REQUESTS = "Too many requests. Please try again in a minute."
SERVER_ERROR = "Something went wrong. Please try again or contact us directly."


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def _read_json(request: Request):
    # Malformed JSON is not a validation failure: it falls through to the 500 handler
    return json.loads(await request.body())


def _rejection(e: Exception, invalid_error: str) -> JSONResponse:
    if isinstance(e, ValidationFailed):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": invalid_error, "details": e.details},
        )
    if isinstance(e, OutOfServiceArea):
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Outside service area",
                "message": e.resolution.message,
                "enquiryOnly": True,
            },
        )
    return JSONResponse(status_code=429, content={"error": TOO_MANY_REQUESTS})


def _server_error(error: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error, "message": SERVER_ERROR})


def _booking_response(outcome: BookingOutcome) -> BookingResponseSchema:
    breakdown = outcome.breakdown
    if breakdown is None:
        # Honeypot: indistinguishable from a real acceptance, minus the pricing detail
        return BookingResponseSchema(
            booking_reference=outcome.reference,
            deposit_required=False,
            deposit_amount=0,
            total=0,
            message=BOOKING_RECEIVED,
        )
    return BookingResponseSchema(
        booking_reference=outcome.reference,
        deposit_required=breakdown.deposit_required,
        deposit_amount=breakdown.deposit_amount,
        total=breakdown.total,
        message=BOOKING_RECEIVED,
        estimated_duration=breakdown.estimated_duration_minutes,
        breakdown=BreakdownSchema(
            items=[
                BreakdownItemSchema(label=item.label, amount=item.amount, kind=item.kind)
                for item in breakdown.items
            ],
            subtotal=breakdown.subtotal,
            total=breakdown.total,
            minimum_charge_applied=breakdown.minimum_charge_applied,
            savings=breakdown.savings,
            travel_fee=breakdown.travel_fee,
            config_version=breakdown.config_version,
        ),
    )


@router.post("/booking", response_model=BookingResponseSchema)
async def submit_booking(
    request: Request,
    uc: SubmitBookingUseCase = Depends(get_submit_booking_use_case),
):
    ip = _client_ip(request)
    try:
        body = await _read_json(request)
        outcome = await uc.execute(body, ip)
    except (ValidationFailed, OutOfServiceArea, RateLimited) as e:
        return _rejection(e, "Invalid booking data")
    except Exception as e:
        logger.exception("Booking API error", extra={"ip": ip, "error": str(e)})
        return _server_error("Failed to process booking")

    return _booking_response(outcome)


@router.post("/enquiry", response_model=EnquiryResponseSchema)
async def submit_enquiry(
    request: Request,
    uc: SubmitEnquiryUseCase = Depends(get_submit_enquiry_use_case),
):
    ip = _client_ip(request)
    try:
        body = await _read_json(request)
        outcome = await uc.execute(body, ip)
    except (ValidationFailed, RateLimited) as e:
        return _rejection(e, "Invalid enquiry data")
    except Exception as e:
        logger.exception("Enquiry API error", extra={"ip": ip, "error": str(e)})
        return _server_error("Failed to process enquiry")

    return EnquiryResponseSchema(enquiry_reference=outcome.reference, message=ENQUIRY_RECEIVED)


@router.post("/check-postcode", response_model=PostcodeCheckResponseSchema)
async def check_postcode(
    request: Request,
    resolver: AreaResolver = Depends(get_area_resolver),
):
    try:
        body = await _read_json(request)
        if not isinstance(body, dict):
            raise ValidationFailed({"body": ["Request body must be a JSON object"]}, message="Invalid postcode")
        try:
            check = PostcodeCheckDTO.model_validate(body)
        except PydanticValidationError as e:
            raise ValidationFailed(flatten_validation_errors(e), message="Invalid postcode") from e
        area = resolver.resolve(check.postcode)
    except ValidationFailed as e:
        return _rejection(e, "Invalid postcode")
    except Exception as e:
        logger.exception("Postcode check API error", extra={"error": str(e)})
        return _server_error("Failed to check postcode")

    return PostcodeCheckResponseSchema(
        postcode=format_postcode(check.postcode),
        district=area.district,
        distance_miles=area.distance_miles,
        travel_fee=area.travel_fee,
        tier=area.tier.id,
        areas=area.tier.areas,
        enquiry_only=area.enquiry_only,
        within_core_radius=area.within_core_radius,
        minimum_booking_minutes=area.minimum_booking_minutes,
        message=area.message,
    )
