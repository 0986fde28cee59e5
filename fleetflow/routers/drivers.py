from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.core.db import get_db
from fleetflow.schemas.driver import DriverCreate, DriverOut, DriverStatusUpdate
from fleetflow.services.driver_service import DriverService

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.get("", response_model=List[DriverOut])
async def list_drivers(db: AsyncSession = Depends(get_db)):
    return await DriverService(db).list_drivers()


@router.get("/available", response_model=List[DriverOut])
async def list_available_drivers(db: AsyncSession = Depends(get_db)):
    """Dispatch-eligible drivers: not On Trip, licence not expired."""
    return await DriverService(db).list_available_drivers()


@router.post("", response_model=DriverOut)
async def create_driver(req: DriverCreate, db: AsyncSession = Depends(get_db)):
    return await DriverService(db).create_driver(
        name=req.name,
        license_no=req.license_no,
        expiry_date=req.expiry_date,
    )


@router.put("/recalculate-all/safety", response_model=List[DriverOut])
async def recalculate_all_safety(db: AsyncSession = Depends(get_db)):
    return await DriverService(db).recalculate_all_safety_scores()


@router.put("/{driver_id}/status", response_model=DriverOut)
async def set_driver_status(driver_id: int, req: DriverStatusUpdate, db: AsyncSession = Depends(get_db)):
    return await DriverService(db).set_status(driver_id, req.status)


@router.put("/{driver_id}/calculate-safety", response_model=DriverOut)
async def calculate_safety(driver_id: int, db: AsyncSession = Depends(get_db)):
    return await DriverService(db).calculate_safety_score(driver_id)
