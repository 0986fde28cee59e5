from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from fleetflow.core.db import Base


class Expense(Base):
    __tablename__ = "expenses"
    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=True)
    driver_name = Column(String, nullable=False, default="")
    # Money columns hold what the user typed ("19k", "₹4,500"); parsed on read
    fuel_cost = Column(String, nullable=False, default="0")
    misc_expense = Column(String, nullable=False, default="0")
    distance = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default="Recorded")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
