from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.core.db import get_db
from fleetflow.schemas.vehicle import VehicleCreate, VehicleOut
from fleetflow.services.vehicle_service import VehicleService

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=List[VehicleOut])
async def list_vehicles(status: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await VehicleService(db).list_vehicles(status=status)


@router.post("", response_model=VehicleOut)
async def create_vehicle(req: VehicleCreate, db: AsyncSession = Depends(get_db)):
    return await VehicleService(db).create_vehicle(
        license_plate=req.license_plate,
        name=req.name,
        max_capacity=req.max_capacity,
        odometer=req.odometer,
    )
