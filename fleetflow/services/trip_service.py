import logging
from typing import List, Optional

from sqlalchemy import select, update, case
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from fleetflow.core.metrics import track_performance
from fleetflow.core.prometheus_metrics import prometheus_collector
from fleetflow.models.driver import Driver, DriverStatus
from fleetflow.models.trip import Trip, TripStatus
from fleetflow.models.vehicle import Vehicle, VehicleStatus
from fleetflow.schemas.trip import TripOut
from fleetflow.services.exceptions import DatabaseQueryError, NotFoundError
from fleetflow.services.validators import BusinessRules

logger = logging.getLogger(__name__)

TRIP_CREATE_STATES = (TripStatus.DRAFT.value, TripStatus.ON_TRIP.value)


class TripService:
    """
    Trip lifecycle and the status cascade onto vehicles and drivers.

    Whenever a trip is dispatched, completed or cancelled, the referenced vehicle and
    driver rows are updated in the same transaction as the trip itself, so the
    dispatch-eligible filters (Available vehicles, On Duty drivers) never see a
    half-applied change:

    - Draft -> On Trip: vehicle On Trip, driver On Trip
    - -> Completed: vehicle Available, driver On Duty, driver.trips + 1,
      driver.completion_rate + 1 (capped at 100)
    - -> Cancelled: vehicle Available, driver On Duty, counters untouched
    - anything else: only the trip row changes

    Transitions are not policed: a Completed trip can be set back to On Trip.
    Counter increments are computed in SQL so concurrent completions for the same
    driver do not overwrite each other.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="TripService")
    async def list_trips(self) -> List[TripOut]:
        stmt = (
            select(Trip, Vehicle.name, Driver.name)
            .outerjoin(Vehicle, Trip.vehicle_id == Vehicle.id)
            .outerjoin(Driver, Trip.driver_id == Driver.id)
            .order_by(Trip.id.desc())
        )
        try:
            rows = (await self.db.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

        trips = []
        for trip, vehicle_name, driver_name in rows:
            out = TripOut.model_validate(trip)
            out.vehicle_name = vehicle_name
            out.driver_name = driver_name
            trips.append(out)
        return trips

    @track_performance(service_name="TripService")
    async def create_trip(
        self,
        vehicle_id: Optional[int],
        driver_id: Optional[int],
        origin: Optional[str],
        destination: Optional[str],
        cargo_weight: Optional[float] = None,
        status: str = TripStatus.ON_TRIP.value,
        estimated_fuel_cost: Optional[str] = None,
    ) -> Trip:
        """
        Inserts a trip in Draft or On Trip.

        A trip created On Trip dispatches immediately (vehicle and driver go On Trip);
        a Draft leaves both untouched.

        Raises:
            ValidationError: vehicle_id, driver_id, origin or destination missing,
                             or status is not Draft / On Trip
            NotFoundError: vehicle or driver does not exist
            DatabaseQueryError: any database failure (nothing is persisted)
        """
        BusinessRules.require(
            vehicle_id=vehicle_id,
            driver_id=driver_id,
            origin=origin,
            destination=destination,
        )
        BusinessRules.validate_choice(status, TRIP_CREATE_STATES, "status")

        try:
            await self._ensure_exists(Vehicle, vehicle_id, "Vehicle not found")
            await self._ensure_exists(Driver, driver_id, "Driver not found")

            trip = Trip(
                vehicle_id=vehicle_id,
                driver_id=driver_id,
                origin=origin,
                destination=destination,
                cargo_weight=cargo_weight,
                estimated_fuel_cost=estimated_fuel_cost,
                status=status,
            )
            self.db.add(trip)
            await self.db.flush()

            if status == TripStatus.ON_TRIP.value:
                await self._dispatch(vehicle_id, driver_id)

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))
        except NotFoundError:
            await self.db.rollback()
            raise

        logger.info(
            "Trip created",
            extra={"trip_id": trip.id, "status": status, "vehicle_id": vehicle_id, "driver_id": driver_id},
        )
        prometheus_collector.record_trip_transition(status)
        return trip

    @track_performance(service_name="TripService")
    async def set_trip_status(self, trip_id: int, new_status: Optional[str]) -> Trip:
        """
        Writes the trip's new status and cascades it to the vehicle and driver.

        Raises:
            ValidationError: new_status missing
            NotFoundError: trip does not exist
            DatabaseQueryError: any database failure (trip, vehicle and driver are rolled back together)
        """
        BusinessRules.require(status=new_status)

        try:
            trip = await self.db.get(Trip, trip_id)
            if trip is None:
                raise NotFoundError("Trip not found")

            previous = trip.status
            trip.status = new_status

            if new_status == TripStatus.ON_TRIP.value:
                await self._dispatch(trip.vehicle_id, trip.driver_id)
            elif new_status == TripStatus.COMPLETED.value:
                await self._release(trip.vehicle_id, trip.driver_id, completed=True)
            elif new_status == TripStatus.CANCELLED.value:
                await self._release(trip.vehicle_id, trip.driver_id, completed=False)

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))
        except NotFoundError:
            await self.db.rollback()
            raise

        logger.info(
            "Trip status changed",
            extra={"trip_id": trip_id, "from_status": previous, "to_status": new_status},
        )
        prometheus_collector.record_trip_transition(new_status)
        return trip

    async def _ensure_exists(self, model, row_id: int, message: str):
        if await self.db.get(model, row_id) is None:
            raise NotFoundError(message)

    async def _dispatch(self, vehicle_id: int, driver_id: int):
        await self.db.execute(
            update(Vehicle)
            .where(Vehicle.id == vehicle_id)
            .values(status=VehicleStatus.ON_TRIP.value)
        )
        await self.db.execute(
            update(Driver)
            .where(Driver.id == driver_id)
            .values(status=DriverStatus.ON_TRIP.value)
        )

    async def _release(self, vehicle_id: int, driver_id: int, completed: bool):
        await self.db.execute(
            update(Vehicle)
            .where(Vehicle.id == vehicle_id)
            .values(status=VehicleStatus.AVAILABLE.value)
        )

        values = {"status": DriverStatus.ON_DUTY.value}
        if completed:
            next_rate = Driver.completion_rate + 1
            values["trips"] = Driver.trips + 1
            values["completion_rate"] = case(
                (next_rate > BusinessRules.MAX_COMPLETION_RATE, BusinessRules.MAX_COMPLETION_RATE),
                else_=next_rate,
            )
        await self.db.execute(
            update(Driver)
            .where(Driver.id == driver_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
