"""
Booking creation, lookup and cancellation
"""
import logging
import re
from datetime import datetime
from typing import Callable, Optional

from ..config import get_settings
from ..exceptions import BookingConflict, BookingNotFound, ConflictError, ServiceNotFound, ValidationError
from ..models.booking import Booking, BookingStatus
from .repository import SchedulingStore
from .slots import SlotCalculator, SlotRejection

settings = get_settings()
logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
LANGUAGES = ("fi", "en")
# Customer-facing cancellation page per language
CANCEL_PATHS = {"fi": "fi/peruuta-varaus", "en": "en/cancel-booking"}

# Status changes an admin may make; anything else is rejected
ALLOWED_TRANSITIONS = {
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED, BookingStatus.COMPLETED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
}


def cancellation_url(booking: Booking) -> str:
    """Link sent to the customer for cancelling the booking"""
    path = CANCEL_PATHS.get(booking.language, CANCEL_PATHS[settings.DEFAULT_LANGUAGE])
    return f"{settings.SITE_URL.rstrip('/')}/{path}/{booking.cancellation_id}"


class BookingService:
    """Creates bookings through the conflict checker and the store's guard"""

    def __init__(
        self,
        store: SchedulingStore,
        calculator: Optional[SlotCalculator] = None,
        now: Callable[[], datetime] = datetime.now
    ):
        self.store = store
        self.calculator = calculator or SlotCalculator(store, now=now)

    @staticmethod
    def _validate_customer(customer_name: str, customer_email: str, language: str):
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if not customer_email or not EMAIL_PATTERN.match(customer_email):
            raise ValidationError(f"Invalid email address '{customer_email}'")
        if language not in LANGUAGES:
            raise ValidationError(f"Unsupported language '{language}'")

    def create_booking(
        self,
        service_id,
        start_time: datetime,
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str] = None,
        notes: Optional[str] = None,
        language: Optional[str] = None
    ) -> Booking:
        """
        Book start_time for the service.
        The end time comes from the service duration, never from the caller.

        Raises:
            ServiceNotFound: unknown or inactive service
            ConflictError: the slot is not bookable (reason says why)
            StoreFailure: the store failed; nothing was booked
        """
        language = language or settings.DEFAULT_LANGUAGE
        self._validate_customer(customer_name, customer_email, language)

        check = self.calculator.check_slot(start_time, service_id)
        if not check.available:
            if check.reason == SlotRejection.SERVICE_NOT_FOUND:
                raise ServiceNotFound(service_id)
            logger.info(f"Booking rejected for service {service_id} at {start_time.isoformat()}: {check.reason.value}")
            raise ConflictError(check.reason.value)

        try:
            booking = self.store.insert_booking(
                service_id=service_id,
                start_time=start_time,
                end_time=check.end_time,
                customer_name=customer_name.strip(),
                customer_email=customer_email.strip(),
                customer_phone=customer_phone,
                notes=notes,
                language=language
            )
        except BookingConflict:
            # Lost the race against a concurrent insert; same answer as the checker
            logger.info(f"Booking for service {service_id} at {start_time.isoformat()} lost a concurrent insert")
            raise ConflictError(SlotRejection.OVERLAP.value)

        logger.info(f"Booking {booking.id} created: service {service_id}, {booking.start_time}-{booking.end_time}")
        return booking

    def get_booking(self, cancellation_id: str) -> Booking:
        booking = self.store.find_booking_by_cancellation_id(cancellation_id)
        if not booking:
            raise BookingNotFound(cancellation_id)
        return booking

    def cancel_booking(self, cancellation_id: str) -> Booking:
        """Cancel by the customer's cancellation id; cancelling twice is a no-op"""
        booking = self.get_booking(cancellation_id)
        if booking.status == BookingStatus.CANCELLED.value:
            return booking
        booking = self._change_status(booking, BookingStatus.CANCELLED)
        logger.info(f"Booking {booking.id} cancelled")
        return booking

    def update_status(self, booking_id: int, status) -> Booking:
        """Admin status change (confirmed -> cancelled/completed)"""
        try:
            status = BookingStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown booking status '{status}'")

        booking = self.store.find_booking(booking_id)
        if not booking:
            raise BookingNotFound(booking_id)
        if booking.status == status.value:
            return booking
        return self._change_status(booking, status)

    def _change_status(self, booking: Booking, status: BookingStatus) -> Booking:
        current = BookingStatus(booking.status)
        if status not in ALLOWED_TRANSITIONS[current]:
            raise ValidationError(f"Booking {booking.id} cannot change from {current.value} to {status.value}")
        return self.store.set_booking_status(booking, status)
