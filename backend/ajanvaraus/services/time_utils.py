"""
Time arithmetic shared by the resolver and the slot calculator

All times are naive and in the single local zone of the business.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Union

from ..exceptions import ValidationError

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end)"""

    start: datetime
    end: datetime

    def overlaps(self, other: "TimeWindow") -> bool:
        # Touching windows (self.end == other.start) do not overlap
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict:
        return {"startTime": self.start.isoformat(), "endTime": self.end.isoformat()}


def overlaps_any(window: TimeWindow, busy: Iterable[TimeWindow]) -> bool:
    return any(window.overlaps(b) for b in busy)


def weekday_index(day: date) -> int:
    """Weekday number with Sunday = 0 ... Saturday = 6"""
    # Python: Monday = 0, Sunday = 6
    return (day.weekday() + 1) % 7


def parse_date_key(value: Union[str, date]) -> date:
    """Parse a YYYY-MM-DD date key"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def parse_time_of_day(value: Union[str, time]) -> time:
    """Parse HH:MM:SS or HH:MM"""
    if isinstance(value, time):
        return value
    for fmt in (TIME_FORMAT, "%H:%M"):
        try:
            return datetime.strptime(value, fmt).time()
        except (TypeError, ValueError):
            continue
    raise ValidationError(f"Invalid time '{value}', expected HH:MM:SS")


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO 8601 timestamp into a naive local datetime"""
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            # fromisoformat only reads the Z suffix from Python 3.11
            if isinstance(value, str) and value.endswith(("Z", "z")):
                value = value[:-1] + "+00:00"
            moment = datetime.fromisoformat(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid timestamp '{value}', expected ISO 8601")
    if moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return moment


def format_date_key(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def format_time_of_day(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def at_time(day: date, value: time) -> datetime:
    return datetime.combine(day, value)


def start_of_day(moment: Union[date, datetime]) -> datetime:
    if isinstance(moment, datetime):
        moment = moment.date()
    return datetime.combine(moment, time.min)


def add_minutes(moment: datetime, minutes: int) -> datetime:
    return moment + timedelta(minutes=minutes)


def date_range(start: date, end: date):
    """Dates from start to end inclusive"""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
