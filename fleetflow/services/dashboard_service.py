from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from fleetflow.core.metrics import track_performance
from fleetflow.models.driver import Driver
from fleetflow.models.trip import Trip, TripStatus
from fleetflow.models.vehicle import Vehicle, VehicleStatus
from fleetflow.schemas.dashboard import DashboardOverview, DashboardStats, RecentTrip
from fleetflow.services.exceptions import DatabaseQueryError

RECENT_TRIPS_LIMIT = 5


class DashboardService:
    """Counters for the dashboard and home page."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, stmt) -> int:
        return (await self.db.execute(stmt)).scalar() or 0

    @track_performance(service_name="DashboardService")
    async def overview(self) -> DashboardOverview:
        recent_stmt = (
            select(Trip.id, Vehicle.name, Driver.name, Trip.status)
            .outerjoin(Vehicle, Trip.vehicle_id == Vehicle.id)
            .outerjoin(Driver, Trip.driver_id == Driver.id)
            .order_by(Trip.id.desc())
            .limit(RECENT_TRIPS_LIMIT)
        )
        try:
            active = await self._count(
                select(func.count(Vehicle.id)).where(Vehicle.status == VehicleStatus.ON_TRIP.value)
            )
            in_shop = await self._count(
                select(func.count(Vehicle.id)).where(Vehicle.status == VehicleStatus.IN_SHOP.value)
            )
            pending = await self._count(
                select(func.count(Trip.id)).where(Trip.status == TripStatus.DRAFT.value)
            )
            recent = (await self.db.execute(recent_stmt)).all()
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

        return DashboardOverview(
            active_fleet=active,
            maintenance_alert=in_shop,
            pending_cargo=pending,
            recent_trips=[
                RecentTrip(id=trip_id, vehicle=vehicle, driver=driver, status=status)
                for trip_id, vehicle, driver, status in recent
            ],
        )

    @track_performance(service_name="DashboardService")
    async def stats(self) -> DashboardStats:
        try:
            return DashboardStats(
                total_vehicles=await self._count(select(func.count(Vehicle.id))),
                total_drivers=await self._count(select(func.count(Driver.id))),
                total_trips=await self._count(select(func.count(Trip.id))),
                completed_trips=await self._count(
                    select(func.count(Trip.id)).where(Trip.status == TripStatus.COMPLETED.value)
                ),
            )
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))
