import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from fleetflow.core.metrics import track_performance
from fleetflow.models.driver import Driver, DriverStatus
from fleetflow.services.exceptions import DatabaseQueryError, NotFoundError
from fleetflow.services.validators import BusinessRules

logger = logging.getLogger(__name__)


class DriverService:
    """Driver roster, dispatch eligibility and safety scoring."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="DriverService")
    async def list_drivers(self) -> List[Driver]:
        try:
            result = await self.db.execute(select(Driver).order_by(Driver.id.desc()))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

    @track_performance(service_name="DriverService")
    async def list_available_drivers(self, today: Optional[date] = None) -> List[Driver]:
        """Drivers that can be dispatched: not already On Trip and licence not expired."""
        today = today or date.today()
        stmt = (
            select(Driver)
            .where(
                Driver.status != DriverStatus.ON_TRIP.value,
                or_(Driver.expiry_date.is_(None), Driver.expiry_date >= today),
            )
            .order_by(Driver.name.asc())
        )
        try:
            return list((await self.db.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

    @track_performance(service_name="DriverService")
    async def create_driver(
        self,
        name: Optional[str],
        license_no: Optional[str] = None,
        expiry_date: Optional[date] = None,
    ) -> Driver:
        BusinessRules.require(name=name)

        driver = Driver(
            name=name,
            license_no=license_no,
            expiry_date=expiry_date,
            status=DriverStatus.ON_DUTY.value,
            completion_rate=BusinessRules.DEFAULT_COMPLETION_RATE,
            safety_score=BusinessRules.DEFAULT_COMPLETION_RATE,
            complaints=0,
            trips=0,
        )
        self.db.add(driver)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))

        logger.info("Driver added", extra={"driver_id": driver.id})
        return driver

    @track_performance(service_name="DriverService")
    async def set_status(self, driver_id: int, status: Optional[str]) -> Driver:
        """Manual toggle from the roster (On Duty / Off Duty / Suspended ...)."""
        BusinessRules.require(status=status)
        BusinessRules.validate_choice(status, [s.value for s in DriverStatus], "status")

        driver = await self._get(driver_id)
        driver.status = status
        await self._commit()

        logger.info("Driver status set", extra={"driver_id": driver_id, "status": status})
        return driver

    @track_performance(service_name="DriverService")
    async def calculate_safety_score(self, driver_id: int) -> Driver:
        driver = await self._get(driver_id)
        driver.safety_score = BusinessRules.safety_score(driver.completion_rate, driver.complaints)
        await self._commit()
        return driver

    @track_performance(service_name="DriverService")
    async def recalculate_all_safety_scores(self) -> List[Driver]:
        drivers = await self.list_drivers()
        for driver in drivers:
            driver.safety_score = BusinessRules.safety_score(driver.completion_rate, driver.complaints)
        await self._commit()
        logger.info("Safety scores recalculated", extra={"drivers": len(drivers)})
        return drivers

    async def _get(self, driver_id: int) -> Driver:
        try:
            driver = await self.db.get(Driver, driver_id)
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))
        if driver is None:
            raise NotFoundError("Driver not found")
        return driver

    async def _commit(self):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))
