import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from fleetflow.core.metrics import track_performance
from fleetflow.models.expense import Expense
from fleetflow.services.exceptions import DatabaseQueryError

logger = logging.getLogger(__name__)


class ExpenseService:
    """Append-only expense ledger."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="ExpenseService")
    async def list_expenses(self) -> List[Expense]:
        try:
            result = await self.db.execute(select(Expense).order_by(Expense.id.desc()))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e))

    @track_performance(service_name="ExpenseService")
    async def create_expense(
        self,
        trip_id: Optional[int] = None,
        driver_name: Optional[str] = None,
        fuel_cost: Optional[str] = None,
        misc_expense: Optional[str] = None,
        distance: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Expense:
        expense = Expense(
            trip_id=trip_id,
            driver_name=driver_name or "",
            fuel_cost=fuel_cost or "0",
            misc_expense=misc_expense or "0",
            distance=distance or "",
            status=status or "Recorded",
        )
        self.db.add(expense)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e))

        logger.info("Expense recorded", extra={"expense_id": expense.id, "trip_id": trip_id})
        return expense
