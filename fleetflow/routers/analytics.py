from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.core.db import get_db
from fleetflow.schemas.analytics import AnalyticsOut
from fleetflow.services.analytics_service import ALL_TIME, AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsOut)
async def analytics(
    period: str = Query(ALL_TIME, description="1m, 3m, 1y, 5y, 10y or all"),
    db: AsyncSession = Depends(get_db),
):
    return await AnalyticsService(db).compute(period)
