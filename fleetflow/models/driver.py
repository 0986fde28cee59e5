import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.orm import relationship

from fleetflow.core.db import Base


class DriverStatus(str, enum.Enum):
    ON_DUTY = "On Duty"
    OFF_DUTY = "Off Duty"
    ON_TRIP = "On Trip"
    SUSPENDED = "Suspended"


class Driver(Base):
    __tablename__ = "drivers"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    license_no = Column(String, nullable=True)
    expiry_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default=DriverStatus.ON_DUTY.value, index=True)
    completion_rate = Column(Integer, nullable=False, default=80)  # 0-100
    safety_score = Column(Integer, nullable=False, default=80)  # 0-100
    complaints = Column(Integer, nullable=False, default=0)
    trips = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    assigned_trips = relationship("Trip", back_populates="driver")
