from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel


SERVICE_TYPES = ("hairdressing", "companionship", "errands", "packages")


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class AddOnItem(RequestModel):
    id: str = Field(min_length=1)
    name: str = ""
    price: float = Field(default=0, ge=0)
    duration: int = Field(default=0, ge=0)


class AdditionalClientItem(RequestModel):
    service_id: str = Field(min_length=1)
    service_name: str = ""
    price: float = Field(default=0, ge=0)
    duration: int = Field(default=0, ge=0)


class TimeBasedSelection(RequestModel):
    hours: float = Field(gt=0, allow_inf_nan=False)
    price: float = Field(default=0, ge=0)


class BookingRequestDTO(RequestModel):
    # Honeypot: checked by the guard before this model is validated
    website: str | None = None

    service_type: Literal["hairdressing", "companionship", "errands", "packages"]
    selected_option: str = Field(min_length=1)
    service_name: str
    option_name: str

    add_ons: list[AddOnItem] = Field(default_factory=list)
    hair_length_surcharge: bool = False
    additional_clients: list[AdditionalClientItem] = Field(default_factory=list)
    time_based_selection: TimeBasedSelection | None = None

    postcode: str = Field(min_length=2, max_length=10)
    address: str = Field(min_length=5, max_length=200)

    selected_date: date
    selected_time: str = Field(min_length=1, max_length=10)
    is_same_day: bool = False

    client_name: str = Field(min_length=2, max_length=100)
    client_email: EmailStr
    client_phone: str = Field(min_length=10, max_length=20)
    special_requests: str = Field(default="", max_length=500)
    is_new_client: bool = True
    is_colour_service: bool = False

    consent_boundaries: StrictBool
    consent_cancellation: StrictBool
    consent_women_only: StrictBool

    # Client-computed values. Never used for pricing; only compared for anomaly logging.
    travel_fee: float | None = Field(default=None, ge=0)
    total: float | None = None
    deposit_required: bool | None = None
    deposit_amount: float | None = None
    estimated_duration: float | None = None

    @field_validator("consent_boundaries")
    @classmethod
    def _boundaries_accepted(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must acknowledge the service boundaries")
        return value

    @field_validator("consent_cancellation")
    @classmethod
    def _cancellation_accepted(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must acknowledge the cancellation policy")
        return value

    @field_validator("consent_women_only")
    @classmethod
    def _women_only_confirmed(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must confirm this is a women-only service")
        return value
