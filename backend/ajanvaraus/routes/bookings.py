"""
API router for bookings
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..exceptions import SchedulingError
from ..models.booking import Booking
from ..services.bookings import BookingService, cancellation_url
from ..services.time_utils import format_date_key, parse_timestamp
from .dependencies import get_booking_service, to_http_error

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


# ==================== Pydantic Schemas ====================

class BookingCreate(BaseModel):
    serviceId: int
    startTime: str  # ISO 8601, end is derived from the service duration
    customerName: str = Field(..., min_length=2, max_length=100)
    customerEmail: str = Field(..., max_length=200)
    customerPhone: Optional[str] = Field(None, max_length=30)
    notes: Optional[str] = None
    language: Optional[str] = Field(None, pattern=r"^(fi|en)$")


class BookingCancel(BaseModel):
    cancellationId: str


class BookingResponse(BaseModel):
    id: int
    serviceId: int
    date: str
    startTime: str
    endTime: str
    status: str
    customerName: str
    language: str
    cancellationId: str
    cancellationUrl: str


def _to_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        serviceId=booking.service_id,
        date=format_date_key(booking.date),
        startTime=booking.start_time.isoformat(),
        endTime=booking.end_time.isoformat(),
        status=booking.status,
        customerName=booking.customer_name,
        language=booking.language,
        cancellationId=booking.cancellation_id,
        cancellationUrl=cancellation_url(booking)
    )


# ==================== API Endpoints ====================

@router.post("", response_model=BookingResponse, status_code=201)
def create_booking(data: BookingCreate, bookings: BookingService = Depends(get_booking_service)):
    """Book a start time"""
    try:
        booking = bookings.create_booking(
            service_id=data.serviceId,
            start_time=parse_timestamp(data.startTime),
            customer_name=data.customerName,
            customer_email=data.customerEmail,
            customer_phone=data.customerPhone,
            notes=data.notes,
            language=data.language
        )
    except SchedulingError as e:
        raise to_http_error(e)
    return _to_response(booking)


@router.post("/cancel", response_model=BookingResponse)
def cancel_booking(data: BookingCancel, bookings: BookingService = Depends(get_booking_service)):
    """Cancel with the id from the confirmation email"""
    try:
        booking = bookings.cancel_booking(data.cancellationId)
    except SchedulingError as e:
        raise to_http_error(e)
    return _to_response(booking)


@router.get("/{cancellation_id}", response_model=BookingResponse)
def get_booking(cancellation_id: str, bookings: BookingService = Depends(get_booking_service)):
    try:
        booking = bookings.get_booking(cancellation_id)
    except SchedulingError as e:
        raise to_http_error(e)
    return _to_response(booking)
