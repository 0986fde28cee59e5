from datetime import datetime
from typing import Optional

from pydantic import field_validator

from fleetflow.schemas.common import CamelModel, ORMModel, blank_to_none, money_to_text


class ExpenseCreate(CamelModel):
    trip_id: Optional[int] = None
    driver_name: Optional[str] = None
    fuel_cost: Optional[str] = None
    misc_expense: Optional[str] = None
    distance: Optional[str] = None
    status: Optional[str] = None

    @field_validator("trip_id", mode="before")
    @classmethod
    def _blank_id(cls, v):
        return blank_to_none(v)

    @field_validator("fuel_cost", "misc_expense", "distance", mode="before")
    @classmethod
    def _money(cls, v):
        return money_to_text(v)


class ExpenseOut(ORMModel):
    id: int
    trip_id: Optional[int] = None
    driver_name: str = ""
    fuel_cost: str = "0"
    misc_expense: str = "0"
    distance: str = ""
    status: str = "Recorded"
    created_at: Optional[datetime] = None
