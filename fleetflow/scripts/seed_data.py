import asyncio
import logging
from datetime import date, timedelta

from fleetflow.core.db import AsyncSessionLocal, init_models
from fleetflow.core.logging import setup_logging
from fleetflow.models import Driver, Vehicle

logger = logging.getLogger(__name__)


async def seed():
    await init_models()
    async with AsyncSessionLocal() as db:
        vehicles = [
            Vehicle(name="Tata Ace", license_plate="MH12AB1234", max_capacity=750, odometer=12000),
            Vehicle(name="Ashok Leyland Dost", license_plate="MH14CD5678", max_capacity=1250, odometer=48500),
            Vehicle(name="Eicher Pro 2049", license_plate="GJ01EF9012", max_capacity=4990, odometer=91000),
        ]
        db.add_all(vehicles)

        drivers = [
            Driver(name="Arjun Mehta", license_no="DL-0420110012345", expiry_date=date.today() + timedelta(days=700)),
            Driver(name="Priya Nair", license_no="KL-0720150067890", expiry_date=date.today() + timedelta(days=365)),
            Driver(name="Ravi Kumar", license_no="MH-1220090054321", expiry_date=date.today() - timedelta(days=30)),
        ]
        db.add_all(drivers)

        await db.commit()
        logger.info("Seed data inserted", extra={"vehicles": len(vehicles), "drivers": len(drivers)})


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
