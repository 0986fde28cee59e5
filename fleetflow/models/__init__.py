# create_all / Alembic detect models here
from .vehicle import Vehicle, VehicleStatus
from .driver import Driver, DriverStatus
from .trip import Trip, TripStatus
from .maintenance import MaintenanceLog, MaintenanceStatus
from .expense import Expense
from .user import User
