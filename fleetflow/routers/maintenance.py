from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.core.db import get_db
from fleetflow.schemas.maintenance import MaintenanceCreate, MaintenanceOut
from fleetflow.services.maintenance_service import MaintenanceService

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.get("", response_model=List[MaintenanceOut])
async def list_maintenance(db: AsyncSession = Depends(get_db)):
    return await MaintenanceService(db).list_logs()


@router.post("", response_model=MaintenanceOut)
async def create_maintenance(req: MaintenanceCreate, db: AsyncSession = Depends(get_db)):
    return await MaintenanceService(db).create_log(
        vehicle_id=req.vehicle_id,
        service_type=req.service_type,
        cost=req.cost,
        notes=req.notes,
    )


@router.put("/{log_id}/complete", response_model=MaintenanceOut)
async def complete_maintenance(log_id: int, db: AsyncSession = Depends(get_db)):
    return await MaintenanceService(db).complete_log(log_id)
