import logging
from datetime import datetime, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from fleetflow.core.metrics import track_performance
from fleetflow.core.money import format_currency, parse_money
from fleetflow.models.driver import Driver
from fleetflow.models.expense import Expense
from fleetflow.models.maintenance import MaintenanceLog
from fleetflow.models.trip import Trip, TripStatus
from fleetflow.models.vehicle import Vehicle
from fleetflow.schemas.analytics import AnalyticsOut, AnalyticsRaw
from fleetflow.services.exceptions import DatabaseQueryError
from fleetflow.services.validators import BusinessRules

logger = logging.getLogger(__name__)

ALL_TIME = "all"

PERIODS = {
    "1m": relativedelta(months=1),
    "3m": relativedelta(months=3),
    "1y": relativedelta(years=1),
    "5y": relativedelta(years=5),
    "10y": relativedelta(years=10),
}


def period_cutoff(period: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Start of the day `period` ago, or None for "all" and unrecognised periods.

    Months and years are calendar based: 31 March minus 1m is 28/29 February.
    """
    delta = PERIODS.get(period or ALL_TIME)
    if delta is None:
        return None
    now = now or datetime.now(timezone.utc)
    return (now - delta).replace(hour=0, minute=0, second=0, microsecond=0)


class AnalyticsService:
    """
    Financial and operational roll-up for a time window.

    Expenses, maintenance and trips are filtered by created_at >= cutoff; vehicle
    and driver counts are the current snapshot. Revenue is a flat amount per
    completed trip. Maintenance cost is summed from the maintenance table itself.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="AnalyticsService")
    async def compute(self, period: Optional[str] = ALL_TIME, now: Optional[datetime] = None) -> AnalyticsOut:
        period = period or ALL_TIME
        cutoff = period_cutoff(period, now)

        expenses_stmt = select(Expense.fuel_cost, Expense.misc_expense)
        maintenance_stmt = select(MaintenanceLog.cost)
        trips_stmt = select(func.count(Trip.id))
        completed_stmt = select(func.count(Trip.id)).where(Trip.status == TripStatus.COMPLETED.value)
        if cutoff is not None:
            expenses_stmt = expenses_stmt.where(Expense.created_at >= cutoff)
            maintenance_stmt = maintenance_stmt.where(MaintenanceLog.created_at >= cutoff)
            trips_stmt = trips_stmt.where(Trip.created_at >= cutoff)
            completed_stmt = completed_stmt.where(Trip.created_at >= cutoff)

        try:
            expense_rows = (await self.db.execute(expenses_stmt)).all()
            maintenance_costs = (await self.db.execute(maintenance_stmt)).scalars().all()
            total_trips = (await self.db.execute(trips_stmt)).scalar() or 0
            completed_trips = (await self.db.execute(completed_stmt)).scalar() or 0
            total_vehicles = (await self.db.execute(select(func.count(Vehicle.id)))).scalar() or 0
            total_drivers = (await self.db.execute(select(func.count(Driver.id)))).scalar() or 0
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

        total_fuel = sum(parse_money(fuel) for fuel, _ in expense_rows)
        total_misc = sum(parse_money(misc) for _, misc in expense_rows)
        total_maintenance = sum(parse_money(cost) for cost in maintenance_costs)

        revenue = completed_trips * BusinessRules.REVENUE_PER_COMPLETED_TRIP
        total_expenses = total_fuel + total_misc + total_maintenance
        net_profit = revenue - total_expenses
        completion_rate = round(completed_trips / total_trips * 100) if total_trips > 0 else 0

        logger.debug(
            "Analytics computed",
            extra={"period": period, "cutoff": cutoff.isoformat() if cutoff else None, "trips": total_trips},
        )

        return AnalyticsOut(
            period=period,
            revenue=format_currency(revenue),
            fuel_cost=format_currency(total_fuel),
            misc_expenses=format_currency(total_misc),
            maintenance=format_currency(total_maintenance),
            total_expenses=format_currency(total_expenses),
            net_profit=format_currency(net_profit),
            total_trips=total_trips,
            completed_trips=completed_trips,
            completion_rate=completion_rate,
            total_vehicles=total_vehicles,
            total_drivers=total_drivers,
            raw=AnalyticsRaw(
                revenue=revenue,
                fuel_cost=total_fuel,
                misc_expenses=total_misc,
                maintenance=total_maintenance,
                total_expenses=total_expenses,
                net_profit=net_profit,
            ),
        )
