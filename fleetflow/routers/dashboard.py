from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.core.db import get_db
from fleetflow.schemas.dashboard import DashboardOverview, DashboardStats
from fleetflow.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOverview)
async def dashboard(db: AsyncSession = Depends(get_db)):
    return await DashboardService(db).overview()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_db)):
    """Extended counters for the home page stats band."""
    return await DashboardService(db).stats()
