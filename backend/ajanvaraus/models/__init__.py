"""
SQLAlchemy models
"""
from .service import Service
from .booking import Booking, BookingStatus
from .regular_hours import RegularHours, DEFAULT_REGULAR_HOURS
from .special_date import SpecialDate
from .blocked_date import BlockedDate

__all__ = [
    "Service",
    "Booking",
    "BookingStatus",
    "RegularHours",
    "DEFAULT_REGULAR_HOURS",
    "SpecialDate",
    "BlockedDate"
]
