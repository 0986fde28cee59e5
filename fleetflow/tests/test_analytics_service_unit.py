from datetime import datetime, timedelta, timezone

import pytest

from fleetflow.models import Expense, MaintenanceLog, Trip
from fleetflow.services.analytics_service import AnalyticsService, period_cutoff


def test_period_cutoff_calendar_months():
    now = datetime(2026, 3, 31, 15, 30, tzinfo=timezone.utc)
    assert period_cutoff("1m", now) == datetime(2026, 2, 28, tzinfo=timezone.utc)
    assert period_cutoff("3m", now) == datetime(2025, 12, 31, tzinfo=timezone.utc)
    assert period_cutoff("1y", now) == datetime(2025, 3, 31, tzinfo=timezone.utc)
    assert period_cutoff("10y", now) == datetime(2016, 3, 31, tzinfo=timezone.utc)


@pytest.mark.parametrize("period", ["all", None, "", "weekly"])
def test_period_cutoff_all_time(period):
    assert period_cutoff(period) is None


@pytest.mark.asyncio
async def test_empty_database(async_db_session):
    out = await AnalyticsService(async_db_session).compute("all")

    assert out.total_trips == 0
    assert out.completion_rate == 0
    assert out.revenue == "₹0"
    assert out.raw.net_profit == 0


@pytest.mark.asyncio
async def test_rollup(async_db_session, test_vehicle, test_driver):
    for status in ["Completed", "Completed", "On Trip"]:
        async_db_session.add(Trip(
            vehicle_id=test_vehicle.id, driver_id=test_driver.id,
            origin="Pune", destination="Goa", status=status,
        ))
    async_db_session.add_all([
        Expense(driver_name="Arjun", fuel_cost="19k", misc_expense="₹1,500"),
        Expense(driver_name="Priya", fuel_cost="2000", misc_expense="0"),
        MaintenanceLog(vehicle_id=test_vehicle.id, issue="Brakes", cost="0.1L"),
    ])
    await async_db_session.commit()

    out = await AnalyticsService(async_db_session).compute("all")

    assert out.total_trips == 3
    assert out.completed_trips == 2
    assert out.completion_rate == 67
    assert out.total_vehicles == 1
    assert out.total_drivers == 1
    assert out.raw.revenue == 80000
    assert out.raw.fuel_cost == 21000
    assert out.raw.misc_expenses == 1500
    assert out.raw.maintenance == pytest.approx(10000)
    assert out.raw.total_expenses == pytest.approx(32500)
    assert out.raw.net_profit == pytest.approx(47500)
    assert out.revenue == "₹80.0K"


@pytest.mark.asyncio
async def test_period_excludes_older_rows(async_db_session, test_vehicle, test_driver):
    long_ago = datetime.now(timezone.utc) - timedelta(days=400)
    async_db_session.add_all([
        Trip(vehicle_id=test_vehicle.id, driver_id=test_driver.id, origin="A", destination="B",
             status="Completed", created_at=long_ago),
        Trip(vehicle_id=test_vehicle.id, driver_id=test_driver.id, origin="C", destination="D",
             status="Completed"),
        Expense(fuel_cost="5000", created_at=long_ago),
        Expense(fuel_cost="1000"),
    ])
    await async_db_session.commit()
    svc = AnalyticsService(async_db_session)

    recent = await svc.compute("1m")
    everything = await svc.compute("all")

    assert recent.total_trips == 1
    assert recent.raw.fuel_cost == 1000
    assert everything.total_trips == 2
    assert everything.raw.fuel_cost == 6000
    # snapshot counts ignore the window
    assert recent.total_vehicles == everything.total_vehicles == 1


@pytest.mark.asyncio
async def test_compute_is_idempotent(async_db_session, test_vehicle, test_driver):
    async_db_session.add(Trip(
        vehicle_id=test_vehicle.id, driver_id=test_driver.id,
        origin="Pune", destination="Goa", status="Completed",
    ))
    async_db_session.add(Expense(fuel_cost="3k"))
    await async_db_session.commit()
    svc = AnalyticsService(async_db_session)

    first = await svc.compute("all")
    second = await svc.compute("all")

    assert first.model_dump() == second.model_dump()
