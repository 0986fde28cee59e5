from datetime import date, datetime
from typing import Optional

from pydantic import field_validator

from fleetflow.schemas.common import CamelModel, ORMModel, blank_to_none, money_to_text


class MaintenanceCreate(CamelModel):
    vehicle_id: Optional[int] = None
    service_type: Optional[str] = None
    cost: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("vehicle_id", mode="before")
    @classmethod
    def _blank_id(cls, v):
        return blank_to_none(v)

    @field_validator("cost", mode="before")
    @classmethod
    def _money(cls, v):
        return money_to_text(v)


class MaintenanceOut(ORMModel):
    id: int
    vehicle_id: int
    issue: str = ""
    service_type: Optional[str] = None
    cost: Optional[str] = None
    notes: Optional[str] = None
    service_date: Optional[date] = None
    status: str
    created_at: Optional[datetime] = None
    vehicle_name: Optional[str] = None
    license_plate: Optional[str] = None
