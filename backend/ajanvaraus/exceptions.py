"""
Scheduling error taxonomy

NotFoundError    - unknown service or booking
ValidationError  - malformed date/time or customer input
ConflictError    - slot unavailable (past date, blocked date, outside hours, overlap)
StoreFailure     - the underlying data store failed
"""
from typing import Optional


class SchedulingError(Exception):
    """Base class for every error raised by the booking core"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SchedulingError):
    pass


class ServiceNotFound(NotFoundError):
    def __init__(self, service_id):
        super().__init__(f"Active service {service_id} not found")
        self.service_id = service_id


class BookingNotFound(NotFoundError):
    def __init__(self, key):
        super().__init__(f"Booking {key} not found")
        self.key = key


class ValidationError(SchedulingError):
    pass


class ConflictError(SchedulingError):
    """The requested slot cannot be booked; reason tells why"""

    def __init__(self, reason: str, message: Optional[str] = None):
        super().__init__(message or f"Slot unavailable: {reason}")
        self.reason = reason


class BookingConflict(ConflictError):
    """Raised by the store when an insert would overlap a confirmed booking"""

    def __init__(self, message: Optional[str] = None):
        super().__init__("conflicts with existing booking", message)


class StoreFailure(SchedulingError):
    """Data access failed; never retried by the core"""

    def __init__(self, message: str, original: Optional[Exception] = None):
        super().__init__(message)
        self.original = original
