from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceOption:
    id: str
    name: str
    category: str  # "hairdressing" | "companionship" | "errands"
    price: float
    duration_minutes: int
    is_time_based: bool = False
    hourly_rate: float | None = None
    min_duration_minutes: int | None = None
    increment_minutes: int | None = None
    max_duration_minutes: int | None = None
    hair_length_surcharge_eligible: bool = False
    is_add_on: bool = False
    add_on_for: tuple[str, ...] = ()
    is_colour: bool = False


@dataclass(frozen=True)
class ServicePackage:
    id: str
    name: str
    price: float
    original_price: float
    duration_minutes: int | None = None

    @property
    def savings(self) -> float:
        return max(self.original_price - self.price, 0)
