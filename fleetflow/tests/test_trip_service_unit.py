import pytest
from sqlalchemy import select, text

from fleetflow.models import Driver, Trip, Vehicle
from fleetflow.services.exceptions import DatabaseQueryError, NotFoundError, ValidationError
from fleetflow.services.trip_service import TripService


@pytest.mark.asyncio
async def test_create_trip_on_trip_dispatches_vehicle_and_driver(async_db_session, test_vehicle, test_driver):
    svc = TripService(async_db_session)

    trip = await svc.create_trip(
        vehicle_id=test_vehicle.id,
        driver_id=test_driver.id,
        origin="Pune",
        destination="Nashik",
        cargo_weight=400,
        status="On Trip",
    )

    await async_db_session.refresh(test_vehicle)
    await async_db_session.refresh(test_driver)
    assert trip.id is not None
    assert trip.status == "On Trip"
    assert test_vehicle.status == "On Trip"
    assert test_driver.status == "On Trip"


@pytest.mark.asyncio
async def test_create_trip_draft_leaves_vehicle_and_driver_untouched(async_db_session, make_vehicle, make_driver):
    vehicle = await make_vehicle(status="Available")
    driver = await make_driver(status="Off Duty")
    svc = TripService(async_db_session)

    trip = await svc.create_trip(vehicle.id, driver.id, "Pune", "Goa", status="Draft")

    await async_db_session.refresh(vehicle)
    await async_db_session.refresh(driver)
    assert trip.status == "Draft"
    assert vehicle.status == "Available"
    assert driver.status == "Off Duty"


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["vehicle_id", "driver_id", "origin", "destination"])
async def test_create_trip_requires_fields(async_db_session, test_vehicle, test_driver, missing):
    kwargs = {
        "vehicle_id": test_vehicle.id,
        "driver_id": test_driver.id,
        "origin": "Pune",
        "destination": "Nashik",
    }
    kwargs[missing] = None

    with pytest.raises(ValidationError) as exc:
        await TripService(async_db_session).create_trip(**kwargs)
    assert exc.value.field == missing


@pytest.mark.asyncio
async def test_create_trip_rejects_terminal_status(async_db_session, test_vehicle, test_driver):
    with pytest.raises(ValidationError):
        await TripService(async_db_session).create_trip(
            test_vehicle.id, test_driver.id, "Pune", "Nashik", status="Completed"
        )


@pytest.mark.asyncio
async def test_create_trip_unknown_vehicle(async_db_session, test_driver):
    with pytest.raises(NotFoundError):
        await TripService(async_db_session).create_trip(9999, test_driver.id, "Pune", "Nashik")


@pytest.mark.asyncio
async def test_dispatch_draft(async_db_session, draft_trip, test_vehicle, test_driver):
    await TripService(async_db_session).set_trip_status(draft_trip.id, "On Trip")

    await async_db_session.refresh(test_vehicle)
    await async_db_session.refresh(test_driver)
    assert test_vehicle.status == "On Trip"
    assert test_driver.status == "On Trip"


@pytest.mark.asyncio
async def test_complete_trip_releases_and_counts(async_db_session, draft_trip, test_vehicle, test_driver):
    svc = TripService(async_db_session)
    await svc.set_trip_status(draft_trip.id, "On Trip")

    trip = await svc.set_trip_status(draft_trip.id, "Completed")

    await async_db_session.refresh(test_vehicle)
    await async_db_session.refresh(test_driver)
    assert trip.status == "Completed"
    assert test_vehicle.status == "Available"
    assert test_driver.status == "On Duty"
    assert test_driver.trips == 1
    assert test_driver.completion_rate == 81


@pytest.mark.asyncio
async def test_complete_trip_caps_completion_rate(async_db_session, test_vehicle, make_driver):
    driver = await make_driver(completion_rate=100, trips=7)
    svc = TripService(async_db_session)
    trip = await svc.create_trip(test_vehicle.id, driver.id, "Pune", "Nashik")

    await svc.set_trip_status(trip.id, "Completed")

    await async_db_session.refresh(driver)
    assert driver.completion_rate == 100
    assert driver.trips == 8


@pytest.mark.asyncio
async def test_cancel_trip_releases_without_counting(async_db_session, test_vehicle, test_driver):
    svc = TripService(async_db_session)
    trip = await svc.create_trip(test_vehicle.id, test_driver.id, "Pune", "Nashik")

    await svc.set_trip_status(trip.id, "Cancelled")

    await async_db_session.refresh(test_vehicle)
    await async_db_session.refresh(test_driver)
    assert test_vehicle.status == "Available"
    assert test_driver.status == "On Duty"
    assert test_driver.trips == 0
    assert test_driver.completion_rate == 80


@pytest.mark.asyncio
async def test_unmatched_status_only_touches_trip(async_db_session, test_vehicle, test_driver):
    svc = TripService(async_db_session)
    trip = await svc.create_trip(test_vehicle.id, test_driver.id, "Pune", "Nashik")

    updated = await svc.set_trip_status(trip.id, "Draft")

    await async_db_session.refresh(test_vehicle)
    await async_db_session.refresh(test_driver)
    assert updated.status == "Draft"
    assert test_vehicle.status == "On Trip"
    assert test_driver.status == "On Trip"


@pytest.mark.asyncio
async def test_completed_trip_can_be_reopened(async_db_session, test_vehicle, test_driver):
    svc = TripService(async_db_session)
    trip = await svc.create_trip(test_vehicle.id, test_driver.id, "Pune", "Nashik")
    await svc.set_trip_status(trip.id, "Completed")

    await svc.set_trip_status(trip.id, "On Trip")

    await async_db_session.refresh(test_vehicle)
    assert test_vehicle.status == "On Trip"


@pytest.mark.asyncio
async def test_two_completions_for_same_driver(async_db_session, make_vehicle, make_driver):
    driver = await make_driver(completion_rate=99)
    first_vehicle = await make_vehicle()
    second_vehicle = await make_vehicle()
    svc = TripService(async_db_session)
    first = await svc.create_trip(first_vehicle.id, driver.id, "Pune", "Nashik")
    second = await svc.create_trip(second_vehicle.id, driver.id, "Nashik", "Surat")

    await svc.set_trip_status(first.id, "Completed")
    await svc.set_trip_status(second.id, "Completed")

    await async_db_session.refresh(driver)
    assert driver.trips == 2
    assert driver.completion_rate == 100


@pytest.mark.asyncio
async def test_set_status_unknown_trip(async_db_session):
    with pytest.raises(NotFoundError):
        await TripService(async_db_session).set_trip_status(424242, "Completed")


@pytest.mark.asyncio
async def test_set_status_requires_status(async_db_session, draft_trip):
    with pytest.raises(ValidationError):
        await TripService(async_db_session).set_trip_status(draft_trip.id, None)


@pytest.mark.asyncio
async def test_list_trips_newest_first_with_names(async_db_session, test_vehicle, test_driver):
    svc = TripService(async_db_session)
    await svc.create_trip(test_vehicle.id, test_driver.id, "A", "B", status="Draft")
    await svc.create_trip(test_vehicle.id, test_driver.id, "C", "D", status="Draft")

    trips = await svc.list_trips()

    assert [t.origin for t in trips] == ["C", "A"]
    assert trips[0].vehicle_name == test_vehicle.name
    assert trips[0].driver_name == test_driver.name


@pytest.mark.asyncio
async def test_failed_driver_update_rolls_back_trip_and_vehicle(async_db_session, test_vehicle, test_driver):
    svc = TripService(async_db_session)
    trip = await svc.create_trip(test_vehicle.id, test_driver.id, "Pune", "Nashik")
    trip_id, vehicle_id, driver_id = trip.id, test_vehicle.id, test_driver.id

    await async_db_session.execute(text(
        "CREATE TRIGGER block_driver_update BEFORE UPDATE ON drivers "
        "BEGIN SELECT RAISE(ABORT, 'driver row locked'); END"
    ))
    await async_db_session.commit()

    with pytest.raises(DatabaseQueryError):
        await svc.set_trip_status(trip_id, "Completed")

    trip_status = (await async_db_session.execute(select(Trip.status).where(Trip.id == trip_id))).scalar_one()
    vehicle_status = (await async_db_session.execute(select(Vehicle.status).where(Vehicle.id == vehicle_id))).scalar_one()
    driver_row = (await async_db_session.execute(
        select(Driver.status, Driver.trips, Driver.completion_rate).where(Driver.id == driver_id)
    )).one()
    assert trip_status == "On Trip"
    assert vehicle_status == "On Trip"
    assert tuple(driver_row) == ("On Trip", 0, 80)
