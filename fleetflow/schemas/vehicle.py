from datetime import datetime
from typing import Optional

from pydantic import field_validator

from fleetflow.schemas.common import CamelModel, ORMModel, blank_to_none


class VehicleCreate(CamelModel):
    name: Optional[str] = None
    license_plate: Optional[str] = None
    max_capacity: Optional[float] = None
    odometer: Optional[float] = 0

    @field_validator("max_capacity", "odometer", mode="before")
    @classmethod
    def _blank_numbers(cls, v):
        return blank_to_none(v)


class VehicleOut(ORMModel):
    id: int
    name: Optional[str] = None
    license_plate: str
    max_capacity: Optional[float] = None
    odometer: Optional[float] = None
    status: str
    created_at: Optional[datetime] = None
