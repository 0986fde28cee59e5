from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.core.db import get_db
from fleetflow.schemas.expense import ExpenseCreate, ExpenseOut
from fleetflow.services.expense_service import ExpenseService

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=List[ExpenseOut])
async def list_expenses(db: AsyncSession = Depends(get_db)):
    return await ExpenseService(db).list_expenses()


@router.post("", response_model=ExpenseOut)
async def create_expense(req: ExpenseCreate, db: AsyncSession = Depends(get_db)):
    return await ExpenseService(db).create_expense(**req.model_dump())
