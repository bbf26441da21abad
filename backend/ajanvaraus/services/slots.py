"""
Slot calculator and conflict checker

list_slots and check_slot share the resolver and TimeWindow.overlaps, so a
slot that is listed always passes the check and vice versa.
"""
import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..config import get_settings
from ..exceptions import ServiceNotFound, ValidationError
from .availability import AvailabilityResolver
from .repository import SchedulingStore
from .time_utils import TimeWindow, add_minutes, date_range, overlaps_any

settings = get_settings()
logger = logging.getLogger(__name__)


class SlotRejection(str, Enum):
    """Why a start time cannot be booked"""
    PAST_DATE = "past date"
    SERVICE_NOT_FOUND = "service not found"
    DATE_BLOCKED = "date blocked"
    OUTSIDE_AVAILABLE_HOURS = "outside available hours"
    STARTS_OUTSIDE_HOURS = "starts outside opening hours"
    ENDS_AFTER_CLOSING = "ends after closing"
    OVERLAP = "conflicts with existing booking"


@dataclass(frozen=True)
class SlotCheck:
    available: bool
    end_time: Optional[datetime] = None
    reason: Optional[SlotRejection] = None

    @classmethod
    def rejected(cls, reason: SlotRejection) -> "SlotCheck":
        return cls(False, reason=reason)


class SlotCalculator:
    """Bookable windows of a day and validation of a single start time"""

    def __init__(
        self,
        store: SchedulingStore,
        resolver: Optional[AvailabilityResolver] = None,
        now: Optional[Callable[[], datetime]] = None
    ):
        """
        The calculator reads the clock through its resolver. Pass either a
        resolver or a clock for the default resolver, not both.
        """
        if resolver is not None and now is not None:
            raise ValueError("Pass the clock to the resolver, not to the calculator")
        self.store = store
        self.resolver = resolver or AvailabilityResolver(store, now=now or datetime.now)

    def _require_service(self, service_id):
        service = self.store.find_active_service(service_id)
        if not service:
            raise ServiceNotFound(service_id)
        return service

    def list_slots(self, target_date: date, service_id, step_minutes: int = None) -> List[TimeWindow]:
        """
        All start times on a step grid that fit the opening window, have not
        passed yet and do not overlap a confirmed booking
        """
        if step_minutes is None:
            step_minutes = settings.SLOT_STEP_MINUTES
        if not isinstance(step_minutes, int) or step_minutes <= 0:
            raise ValidationError(f"Step must be a positive number of minutes, got {step_minutes!r}")

        service = self._require_service(service_id)

        day = self.resolver.resolve_day(target_date)
        window = day.window
        if window is None:
            return []

        busy = self.store.find_confirmed_bookings(target_date)
        now = self.resolver.now()
        slots = []

        candidate = window.start
        while candidate < window.end:
            slot = TimeWindow(candidate, add_minutes(candidate, service.duration_minutes))
            # Later candidates only end later
            if slot.end > window.end:
                break
            # Earlier today is no longer bookable
            if slot.start >= now and not overlaps_any(slot, busy):
                slots.append(slot)
            candidate = add_minutes(candidate, step_minutes)

        return slots

    def check_slot(self, start_time: datetime, service_id) -> SlotCheck:
        """Validate one proposed start time; the sole gate before a booking is stored"""
        if self.resolver.has_passed(start_time):
            return SlotCheck.rejected(SlotRejection.PAST_DATE)

        service = self.store.find_active_service(service_id)
        if not service:
            return SlotCheck.rejected(SlotRejection.SERVICE_NOT_FOUND)

        target_date = start_time.date()
        if self.store.find_blocked_date(target_date):
            return SlotCheck.rejected(SlotRejection.DATE_BLOCKED)

        window = self.resolver.resolve_day(target_date).window
        if window is None:
            return SlotCheck.rejected(SlotRejection.OUTSIDE_AVAILABLE_HOURS)

        slot = TimeWindow(start_time, add_minutes(start_time, service.duration_minutes))
        if slot.start < window.start or slot.start >= window.end:
            return SlotCheck.rejected(SlotRejection.STARTS_OUTSIDE_HOURS)
        if slot.end > window.end:
            return SlotCheck.rejected(SlotRejection.ENDS_AFTER_CLOSING)

        if overlaps_any(slot, self.store.find_confirmed_bookings(target_date)):
            return SlotCheck.rejected(SlotRejection.OVERLAP)

        return SlotCheck(True, end_time=slot.end)

    def date_overview(
        self,
        service_id,
        start: date,
        end: date,
        step_minutes: int = None
    ) -> Tuple[List[date], List[date]]:
        """
        Split a date range into days with at least one free slot and the rest
        """
        self._require_service(service_id)

        available, unavailable = [], []
        for day in date_range(start, end):
            if self.list_slots(day, service_id, step_minutes):
                available.append(day)
            else:
                unavailable.append(day)

        logger.debug(f"Overview {start}..{end} for service {service_id}: {len(available)} open days")
        return available, unavailable

    def month_overview(self, year: int, month: int, service_id, step_minutes: int = None):
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month {month}")
        last_day = calendar.monthrange(year, month)[1]
        return self.date_overview(service_id, date(year, month, 1), date(year, month, last_day), step_minutes)
