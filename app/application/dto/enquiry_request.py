from __future__ import annotations

from typing import Literal

from pydantic import EmailStr, Field

from app.application.dto.booking_request import RequestModel


class EnquiryRequestDTO(RequestModel):
    website: str | None = None

    service_type: str | None = None
    service_name: str | None = None
    postcode: str = Field(min_length=2, max_length=10)
    address: str | None = Field(default=None, max_length=200)

    client_name: str = Field(min_length=2, max_length=100)
    client_email: EmailStr
    client_phone: str = Field(min_length=10, max_length=20)
    message: str = Field(min_length=20, max_length=2000)

    preferred_date: str | None = None
    preferred_time: str | None = None
    reason: Literal["out-of-area", "general", "custom-request"]


class PostcodeCheckDTO(RequestModel):
    postcode: str = Field(min_length=2, max_length=10)
