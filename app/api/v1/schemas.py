from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BreakdownItemSchema(ResponseModel):
    label: str
    amount: float
    kind: str


class BreakdownSchema(ResponseModel):
    items: list[BreakdownItemSchema] = Field(default_factory=list)
    subtotal: float = 0
    total: float = 0
    minimum_charge_applied: bool = False
    savings: float = 0
    travel_fee: float = 0
    config_version: str | None = None


class BookingResponseSchema(ResponseModel):
    success: bool = True
    booking_reference: str
    deposit_required: bool
    deposit_amount: float
    total: float
    message: str
    estimated_duration: int | None = None
    breakdown: BreakdownSchema | None = None


class EnquiryResponseSchema(ResponseModel):
    success: bool = True
    enquiry_reference: str
    message: str


class PostcodeCheckResponseSchema(ResponseModel):
    success: bool = True
    postcode: str
    district: str
    distance_miles: float | None
    travel_fee: float
    tier: str
    areas: str | None = None
    enquiry_only: bool
    within_core_radius: bool
    minimum_booking_minutes: int
    message: str
