"""
Opening-hours administration
"""
import logging
from datetime import date, time
from typing import List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import StoreFailure, ValidationError
from ..models.blocked_date import BlockedDate
from ..models.booking import Booking, BookingStatus
from ..models.regular_hours import RegularHours, DEFAULT_REGULAR_HOURS, DAY_NAMES
from ..models.special_date import SpecialDate
from .time_utils import format_time_of_day, parse_time_of_day

logger = logging.getLogger(__name__)

TimeInput = Union[time, str]


def _validate_window(start_time: time, end_time: time):
    if start_time >= end_time:
        raise ValidationError(
            f"Opening time {format_time_of_day(start_time)} must be before closing time {format_time_of_day(end_time)}"
        )


class ScheduleService:
    """Manages regular hours, special dates and blocked dates"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise StoreFailure(f"Failed to {action}", e) from e

    def set_regular_hours(
        self,
        day_of_week: int,
        start_time: TimeInput,
        end_time: TimeInput,
        is_available: bool = True
    ) -> RegularHours:
        """
        Set the opening hours of a weekday (0=Sunday)
        Existing bookings are not re-validated
        """
        if day_of_week not in range(7):
            raise ValidationError(f"Day of week must be 0-6 (Sunday=0), got {day_of_week}")
        start_time = parse_time_of_day(start_time)
        end_time = parse_time_of_day(end_time)
        _validate_window(start_time, end_time)

        hours = self.db.query(RegularHours).filter(
            RegularHours.day_of_week == day_of_week
        ).first()

        if hours:
            hours.start_time = start_time
            hours.end_time = end_time
            hours.is_available = is_available
        else:
            hours = RegularHours(
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
                is_available=is_available
            )
            self.db.add(hours)

        self._commit("save regular hours")
        self.db.refresh(hours)
        return hours

    def get_week_schedule(self) -> List[dict]:
        """
        Weekly schedule, Sunday first
        Days without a row are reported closed
        """
        rows = {h.day_of_week: h for h in self.db.query(RegularHours).all()}
        result = []

        for day_num in range(7):
            hours = rows.get(day_num)
            result.append({
                "day_of_week": day_num,
                "day_name": DAY_NAMES[day_num],
                "start_time": format_time_of_day(hours.start_time) if hours else None,
                "end_time": format_time_of_day(hours.end_time) if hours else None,
                "is_available": bool(hours and hours.is_available)
            })

        return result

    def init_default_schedule(self):
        """
        Seed the default weekly schedule
        """
        existing = self.db.query(RegularHours).count()
        if existing > 0:
            return  # already configured

        for day_data in DEFAULT_REGULAR_HOURS:
            self.db.add(RegularHours(
                day_of_week=day_data["day_of_week"],
                start_time=parse_time_of_day(day_data["start_time"]),
                end_time=parse_time_of_day(day_data["end_time"]),
                is_available=day_data["is_available"]
            ))

        self._commit("seed regular hours")
        logger.info("Default weekly schedule created")

    def set_special_date(
        self,
        target_date: date,
        start_time: TimeInput,
        end_time: TimeInput,
        is_available: bool = True,
        note: Optional[str] = None
    ) -> SpecialDate:
        """Override the regular hours of one date"""
        start_time = parse_time_of_day(start_time)
        end_time = parse_time_of_day(end_time)
        _validate_window(start_time, end_time)

        special = self.db.query(SpecialDate).filter(SpecialDate.date == target_date).first()
        if special:
            special.start_time = start_time
            special.end_time = end_time
            special.is_available = is_available
            special.note = note
        else:
            special = SpecialDate(
                date=target_date,
                start_time=start_time,
                end_time=end_time,
                is_available=is_available,
                note=note
            )
            self.db.add(special)

        self._commit("save special date")
        self.db.refresh(special)
        return special

    def remove_special_date(self, target_date: date) -> bool:
        special = self.db.query(SpecialDate).filter(SpecialDate.date == target_date).first()
        if not special:
            return False
        self.db.delete(special)
        self._commit("remove special date")
        return True

    def block_date(self, target_date: date, reason: Optional[str] = None) -> BlockedDate:
        """
        Close a whole date
        Confirmed bookings on that date stay as they are
        """
        blocked = self.db.query(BlockedDate).filter(BlockedDate.date == target_date).first()
        if blocked:
            blocked.reason = reason
        else:
            blocked = BlockedDate(date=target_date, reason=reason)
            self.db.add(blocked)

        self._commit("block date")
        self.db.refresh(blocked)

        remaining = self.db.query(Booking).filter(
            Booking.date == target_date,
            Booking.status == BookingStatus.CONFIRMED.value
        ).count()
        if remaining:
            logger.warning(f"Blocked {target_date} still has {remaining} confirmed booking(s)")
        return blocked

    def unblock_date(self, target_date: date) -> bool:
        blocked = self.db.query(BlockedDate).filter(BlockedDate.date == target_date).first()
        if not blocked:
            return False
        self.db.delete(blocked)
        self._commit("unblock date")
        return True

    def list_blocked_dates(self, from_date: Optional[date] = None) -> List[BlockedDate]:
        query = self.db.query(BlockedDate)
        if from_date:
            query = query.filter(BlockedDate.date >= from_date)
        return query.order_by(BlockedDate.date).all()
