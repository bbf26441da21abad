"""
Data access for the booking core

SchedulingStore is the collaborator the resolver, calculator and booking
service read through. SqlSchedulingStore is the SQLAlchemy implementation.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import BookingConflict, StoreFailure
from ..models.blocked_date import BlockedDate
from ..models.booking import Booking, BookingStatus
from ..models.regular_hours import RegularHours
from ..models.service import Service
from ..models.special_date import SpecialDate
from .time_utils import TimeWindow, overlaps_any

logger = logging.getLogger(__name__)


class SchedulingStore(ABC):
    """Reads and writes needed by availability and booking"""

    @abstractmethod
    def find_blocked_date(self, day: date) -> Optional[BlockedDate]:
        ...

    @abstractmethod
    def find_special_date(self, day: date) -> Optional[SpecialDate]:
        ...

    @abstractmethod
    def find_regular_hours(self, day_of_week: int) -> Optional[RegularHours]:
        ...

    @abstractmethod
    def find_active_service(self, service_id: int) -> Optional[Service]:
        ...

    @abstractmethod
    def list_active_services(self) -> List[Service]:
        ...

    @abstractmethod
    def find_confirmed_bookings(self, day: date) -> List[TimeWindow]:
        ...

    @abstractmethod
    def insert_booking(
        self,
        service_id: int,
        start_time: datetime,
        end_time: datetime,
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str] = None,
        notes: Optional[str] = None,
        language: str = "fi"
    ) -> Booking:
        """
        Persist a confirmed booking.
        Must raise BookingConflict if the window overlaps a confirmed booking,
        whatever the caller checked beforehand.
        """

    @abstractmethod
    def find_booking(self, booking_id: int) -> Optional[Booking]:
        ...

    @abstractmethod
    def find_booking_by_cancellation_id(self, cancellation_id: str) -> Optional[Booking]:
        ...

    @abstractmethod
    def set_booking_status(self, booking: Booking, status: BookingStatus) -> Booking:
        ...


class SqlSchedulingStore(SchedulingStore):
    """SchedulingStore on a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store failure while trying to {action}: {e}")
            raise StoreFailure(f"Failed to {action}", e) from e

    def find_blocked_date(self, day: date) -> Optional[BlockedDate]:
        with self._store_errors("read blocked date"):
            return self.db.query(BlockedDate).filter(BlockedDate.date == day).first()

    def find_special_date(self, day: date) -> Optional[SpecialDate]:
        with self._store_errors("read special date"):
            return self.db.query(SpecialDate).filter(SpecialDate.date == day).first()

    def find_regular_hours(self, day_of_week: int) -> Optional[RegularHours]:
        with self._store_errors("read regular hours"):
            return self.db.query(RegularHours).filter(
                RegularHours.day_of_week == day_of_week
            ).first()

    def find_active_service(self, service_id: int) -> Optional[Service]:
        with self._store_errors("read service"):
            return self.db.query(Service).filter(
                Service.id == service_id,
                Service.is_active == True  # noqa: E712
            ).first()

    def list_active_services(self) -> List[Service]:
        with self._store_errors("list services"):
            return self.db.query(Service).filter(
                Service.is_active == True  # noqa: E712
            ).order_by(Service.sort_order, Service.id).all()

    def _confirmed_on(self, day: date, lock: bool = False):
        query = self.db.query(Booking).filter(
            Booking.date == day,
            Booking.status == BookingStatus.CONFIRMED.value
        ).order_by(Booking.start_time)
        if lock:
            query = query.with_for_update()
        return query.all()

    def find_confirmed_bookings(self, day: date) -> List[TimeWindow]:
        with self._store_errors("read bookings"):
            return [TimeWindow(b.start_time, b.end_time) for b in self._confirmed_on(day)]

    def _lock_day(self, day: date):
        # Serialises concurrent inserts for one date on PostgreSQL. SQLite
        # engines take the write lock at BEGIN instead (database.py)
        if self.db.get_bind().dialect.name == "postgresql":
            self.db.execute(
                text("SELECT pg_advisory_xact_lock(:key)"),
                {"key": int(day.strftime("%Y%m%d"))}
            )

    def insert_booking(
        self,
        service_id: int,
        start_time: datetime,
        end_time: datetime,
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str] = None,
        notes: Optional[str] = None,
        language: str = "fi"
    ) -> Booking:
        day = start_time.date()
        window = TimeWindow(start_time, end_time)

        with self._store_errors("insert booking"):
            try:
                self._lock_day(day)
                busy = [TimeWindow(b.start_time, b.end_time) for b in self._confirmed_on(day, lock=True)]
                if overlaps_any(window, busy):
                    self.db.rollback()
                    raise BookingConflict(f"Booking {start_time.isoformat()} overlaps a confirmed booking")

                booking = Booking(
                    service_id=service_id,
                    date=day,
                    start_time=start_time,
                    end_time=end_time,
                    status=BookingStatus.CONFIRMED.value,
                    customer_name=customer_name,
                    customer_email=customer_email,
                    customer_phone=customer_phone,
                    notes=notes,
                    language=language,
                    cancellation_id=str(uuid.uuid4())
                )
                self.db.add(booking)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                logger.warning(f"Unique guard rejected booking at {start_time.isoformat()}: {e.orig}")
                raise BookingConflict(f"Booking {start_time.isoformat()} collides with a confirmed booking")

            self.db.refresh(booking)
            return booking

    def find_booking(self, booking_id: int) -> Optional[Booking]:
        with self._store_errors("read booking"):
            return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def find_booking_by_cancellation_id(self, cancellation_id: str) -> Optional[Booking]:
        with self._store_errors("read booking"):
            return self.db.query(Booking).filter(
                Booking.cancellation_id == cancellation_id
            ).first()

    def set_booking_status(self, booking: Booking, status: BookingStatus) -> Booking:
        with self._store_errors("update booking status"):
            booking.status = status.value
            self.db.commit()
            self.db.refresh(booking)
            return booking
