import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from fleetflow.core.metrics import track_performance
from fleetflow.core.prometheus_metrics import prometheus_collector
from fleetflow.models.expense import Expense
from fleetflow.models.maintenance import MaintenanceLog, MaintenanceStatus
from fleetflow.models.vehicle import Vehicle, VehicleStatus
from fleetflow.schemas.maintenance import MaintenanceOut
from fleetflow.services.exceptions import DatabaseQueryError, NotFoundError
from fleetflow.services.validators import BusinessRules

logger = logging.getLogger(__name__)

MAINTENANCE_EXPENSE_PREFIX = "Maintenance: "


class MaintenanceService:
    """
    Maintenance log with its side effects on the vehicle and the expense ledger.

    Opening a log puts the vehicle In Shop and, when a cost was entered, books the
    cost as a misc expense so it flows into the financial analytics. Completing the
    log makes the vehicle Available again.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="MaintenanceService")
    async def list_logs(self) -> List[MaintenanceOut]:
        stmt = (
            select(MaintenanceLog, Vehicle.name, Vehicle.license_plate)
            .outerjoin(Vehicle, MaintenanceLog.vehicle_id == Vehicle.id)
            .order_by(MaintenanceLog.id.desc())
        )
        try:
            rows = (await self.db.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

        logs = []
        for log, vehicle_name, license_plate in rows:
            out = MaintenanceOut.model_validate(log)
            out.vehicle_name = vehicle_name
            out.license_plate = license_plate
            logs.append(out)
        return logs

    @track_performance(service_name="MaintenanceService")
    async def create_log(
        self,
        vehicle_id: Optional[int],
        service_type: Optional[str] = None,
        cost: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> MaintenanceLog:
        """
        Opens a maintenance log (In Progress), sends the vehicle to the shop and
        records the cost, if any, as an expense tagged "Maintenance: <service type>".

        Raises:
            ValidationError: vehicle_id missing
            NotFoundError: vehicle does not exist
            DatabaseQueryError: any database failure (log, vehicle and expense roll back together)
        """
        BusinessRules.require(vehicle_id=vehicle_id)

        try:
            if await self.db.get(Vehicle, vehicle_id) is None:
                raise NotFoundError("Vehicle not found")

            log = MaintenanceLog(
                vehicle_id=vehicle_id,
                issue=service_type or "",
                service_type=service_type,
                cost=cost,
                notes=notes,
                service_date=date.today(),
                status=MaintenanceStatus.IN_PROGRESS.value,
            )
            self.db.add(log)

            await self.db.execute(
                update(Vehicle)
                .where(Vehicle.id == vehicle_id)
                .values(status=VehicleStatus.IN_SHOP.value)
            )

            if cost:
                self.db.add(Expense(
                    driver_name=f"{MAINTENANCE_EXPENSE_PREFIX}{service_type or 'Service'}",
                    fuel_cost="0",
                    misc_expense=cost,
                    distance="",
                    status="Recorded",
                ))

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))
        except NotFoundError:
            await self.db.rollback()
            raise

        logger.info(
            "Maintenance opened",
            extra={"maintenance_id": log.id, "vehicle_id": vehicle_id, "cost": cost},
        )
        prometheus_collector.record_maintenance_event("opened")
        return log

    @track_performance(service_name="MaintenanceService")
    async def complete_log(self, log_id: int) -> MaintenanceLog:
        """
        Marks a log Completed and returns its vehicle to Available.

        Raises:
            NotFoundError: log does not exist
        """
        try:
            log = await self.db.get(MaintenanceLog, log_id)
            if log is None:
                raise NotFoundError("Record not found")

            log.status = MaintenanceStatus.COMPLETED.value
            if log.vehicle_id:
                await self.db.execute(
                    update(Vehicle)
                    .where(Vehicle.id == log.vehicle_id)
                    .values(status=VehicleStatus.AVAILABLE.value)
                )

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))
        except NotFoundError:
            await self.db.rollback()
            raise

        logger.info("Maintenance completed", extra={"maintenance_id": log_id, "vehicle_id": log.vehicle_id})
        prometheus_collector.record_maintenance_event("completed")
        return log
