import enum
from datetime import date, datetime, timezone

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from fleetflow.core.db import Base


class MaintenanceStatus(str, enum.Enum):
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class MaintenanceLog(Base):
    __tablename__ = "maintenance"
    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    issue = Column(String, nullable=False, default="")
    service_type = Column(String, nullable=True)
    cost = Column(String, nullable=True)  # free text, see core.money
    notes = Column(Text, nullable=True)
    service_date = Column(Date, nullable=False, default=date.today)
    status = Column(String, nullable=False, default=MaintenanceStatus.IN_PROGRESS.value)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    vehicle = relationship("Vehicle", back_populates="maintenance_logs")
