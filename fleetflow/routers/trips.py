from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.core.db import get_db
from fleetflow.schemas.trip import TripCreate, TripOut, TripStatusUpdate
from fleetflow.services.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["trips"])


@router.get("", response_model=List[TripOut])
async def list_trips(db: AsyncSession = Depends(get_db)):
    return await TripService(db).list_trips()


@router.post("", response_model=TripOut)
async def create_trip(req: TripCreate, db: AsyncSession = Depends(get_db)):
    """Create a trip in Draft or On Trip; On Trip dispatches the vehicle and driver."""
    return await TripService(db).create_trip(
        vehicle_id=req.vehicle_id,
        driver_id=req.driver_id,
        origin=req.origin,
        destination=req.destination,
        cargo_weight=req.cargo_weight,
        status=req.status,
        estimated_fuel_cost=req.fuel_cost,
    )


@router.put("/{trip_id}/status", response_model=TripOut)
async def set_trip_status(trip_id: int, req: TripStatusUpdate, db: AsyncSession = Depends(get_db)):
    return await TripService(db).set_trip_status(trip_id, req.status)
