import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from fleetflow.core.metrics import track_performance
from fleetflow.models.vehicle import Vehicle, VehicleStatus
from fleetflow.services.exceptions import ConflictError, DatabaseQueryError
from fleetflow.services.validators import BusinessRules

logger = logging.getLogger(__name__)


class VehicleService:
    """Vehicle registry."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="VehicleService")
    async def list_vehicles(self, status: Optional[str] = None) -> List[Vehicle]:
        """Newest first; optionally only vehicles in a given status (e.g. Available for dispatch)."""
        stmt = select(Vehicle).order_by(Vehicle.id.desc())
        if status:
            BusinessRules.validate_choice(status, [s.value for s in VehicleStatus], "status")
            stmt = stmt.where(Vehicle.status == status)
        try:
            return list((await self.db.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

    @track_performance(service_name="VehicleService")
    async def create_vehicle(
        self,
        license_plate: Optional[str],
        name: Optional[str] = None,
        max_capacity: Optional[float] = None,
        odometer: Optional[float] = 0,
    ) -> Vehicle:
        BusinessRules.require(license_plate=license_plate)

        vehicle = Vehicle(
            name=name,
            license_plate=license_plate.strip(),
            max_capacity=max_capacity,
            odometer=odometer or 0,
            status=VehicleStatus.AVAILABLE.value,
        )
        self.db.add(vehicle)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"License plate {license_plate} is already registered.")
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))

        logger.info("Vehicle registered", extra={"vehicle_id": vehicle.id, "license_plate": vehicle.license_plate})
        return vehicle
