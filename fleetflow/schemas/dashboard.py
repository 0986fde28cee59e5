from typing import Optional

from fleetflow.schemas.common import CamelModel


class RecentTrip(CamelModel):
    id: int
    vehicle: Optional[str] = None
    driver: Optional[str] = None
    status: str


class DashboardOverview(CamelModel):
    active_fleet: int = 0
    maintenance_alert: int = 0
    pending_cargo: int = 0
    recent_trips: list[RecentTrip] = []


class DashboardStats(CamelModel):
    total_vehicles: int = 0
    total_drivers: int = 0
    total_trips: int = 0
    completed_trips: int = 0
