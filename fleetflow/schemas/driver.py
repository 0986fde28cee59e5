from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from fleetflow.schemas.common import CamelModel, ORMModel, blank_to_none


class DriverCreate(CamelModel):
    name: Optional[str] = None
    license_no: Optional[str] = None
    expiry_date: Optional[date] = None

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _blank_date(cls, v):
        return blank_to_none(v)


class DriverStatusUpdate(BaseModel):
    status: Optional[str] = None


class DriverOut(ORMModel):
    id: int
    name: str
    license_no: Optional[str] = None
    expiry_date: Optional[date] = None
    status: str
    completion_rate: int = 80
    safety_score: int = 80
    complaints: int = 0
    trips: int = 0
    created_at: Optional[datetime] = None
