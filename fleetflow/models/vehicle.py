import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.orm import relationship

from fleetflow.core.db import Base


class VehicleStatus(str, enum.Enum):
    AVAILABLE = "Available"
    ON_TRIP = "On Trip"
    IN_SHOP = "In Shop"


class Vehicle(Base):
    __tablename__ = "vehicles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    license_plate = Column(String, unique=True, nullable=False)
    max_capacity = Column(Float, nullable=True)  # kg
    odometer = Column(Float, nullable=True)  # km
    status = Column(String, nullable=False, default=VehicleStatus.AVAILABLE.value, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    trips = relationship("Trip", back_populates="vehicle")
    maintenance_logs = relationship("MaintenanceLog", back_populates="vehicle")
