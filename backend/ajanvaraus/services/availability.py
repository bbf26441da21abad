"""
Availability resolver

Decides the effective opening window of one calendar date.
Precedence: past date > beyond the booking horizon > blocked date >
special date > regular weekly hours.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional

from ..config import get_settings
from .repository import SchedulingStore
from .time_utils import TimeWindow, at_time, format_time_of_day, start_of_day, weekday_index

settings = get_settings()


@dataclass(frozen=True)
class DayAvailability:
    """Effective window of a date"""

    day: date
    available: bool
    source: str  # past, horizon, blocked, special, regular, none
    open_start: Optional[time] = None
    open_end: Optional[time] = None
    reason: Optional[str] = None

    @property
    def window(self) -> Optional[TimeWindow]:
        if not self.available:
            return None
        return TimeWindow(at_time(self.day, self.open_start), at_time(self.day, self.open_end))

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "available": self.available,
            "source": self.source,
            "openStart": format_time_of_day(self.open_start) if self.open_start else None,
            "openEnd": format_time_of_day(self.open_end) if self.open_end else None,
            "reason": self.reason,
        }


class AvailabilityResolver:
    """Applies the opening-hours rules to a date"""

    def __init__(
        self,
        store: SchedulingStore,
        now: Callable[[], datetime] = datetime.now,
        days_ahead: Optional[int] = None
    ):
        self.store = store
        self.now = now
        # Last bookable date is today + days_ahead
        self.days_ahead = settings.BOOKING_DAYS_AHEAD if days_ahead is None else days_ahead

    def today(self) -> date:
        return start_of_day(self.now()).date()

    def is_past(self, day: date) -> bool:
        return day < self.today()

    def has_passed(self, moment: datetime) -> bool:
        return moment < self.now()

    def last_bookable_date(self) -> date:
        return self.today() + timedelta(days=self.days_ahead)

    def resolve_day(self, day: date) -> DayAvailability:
        if self.is_past(day):
            return DayAvailability(day, False, "past")

        if day > self.last_bookable_date():
            return DayAvailability(
                day, False, "horizon",
                reason=f"Bookings open {self.days_ahead} days ahead"
            )

        blocked = self.store.find_blocked_date(day)
        if blocked:
            return DayAvailability(day, False, "blocked", reason=blocked.reason)

        special = self.store.find_special_date(day)
        if special:
            return self._from_rule(day, special, "special")

        regular = self.store.find_regular_hours(weekday_index(day))
        if regular:
            return self._from_rule(day, regular, "regular")

        return DayAvailability(day, False, "none")

    @staticmethod
    def _from_rule(day: date, rule, source: str) -> DayAvailability:
        return DayAvailability(
            day,
            bool(rule.is_available),
            source,
            open_start=rule.start_time,
            open_end=rule.end_time,
            reason=getattr(rule, "note", None),
        )
