from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fleetflow.models.trip import TripStatus
from fleetflow.schemas.common import CamelModel, ORMModel, blank_to_none, money_to_text


class TripCreate(CamelModel):
    vehicle_id: Optional[int] = None
    driver_id: Optional[int] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    cargo_weight: Optional[float] = None
    fuel_cost: Optional[str] = Field(None, description="Estimated fuel cost, free text")
    status: Optional[str] = TripStatus.ON_TRIP.value

    @field_validator("vehicle_id", "driver_id", "cargo_weight", mode="before")
    @classmethod
    def _blank_numbers(cls, v):
        return blank_to_none(v)

    @field_validator("fuel_cost", mode="before")
    @classmethod
    def _money(cls, v):
        return money_to_text(v)

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        return blank_to_none(v) or TripStatus.ON_TRIP.value


class TripStatusUpdate(BaseModel):
    status: Optional[str] = None


class TripOut(ORMModel):
    id: int
    vehicle_id: int
    driver_id: int
    origin: str
    destination: str
    cargo_weight: Optional[float] = None
    estimated_fuel_cost: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    vehicle_name: Optional[str] = None
    driver_name: Optional[str] = None
