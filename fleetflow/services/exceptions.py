class FleetDomainError(Exception):
    """Base class for all fleet domain errors."""

class ValidationError(FleetDomainError):
    """Raised when a required field is missing or a value is outside its allowed set."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field

class NotFoundError(FleetDomainError):
    """Raised when a referenced vehicle, driver, trip or maintenance record does not exist."""

class ConflictError(FleetDomainError):
    """Raised when a write collides with a unique constraint (license plate, username, email)."""

class DatabaseQueryError(FleetDomainError):
    """Raised when a database statement fails; carries the driver's message."""
