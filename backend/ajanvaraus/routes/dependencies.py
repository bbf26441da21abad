"""
Shared FastAPI dependencies and error mapping
"""
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import ConflictError, NotFoundError, SchedulingError, StoreFailure, ValidationError
from ..services.bookings import BookingService
from ..services.repository import SqlSchedulingStore
from ..services.slots import SlotCalculator


def get_store(db: Session = Depends(get_db)) -> SqlSchedulingStore:
    return SqlSchedulingStore(db)


def get_calculator(store: SqlSchedulingStore = Depends(get_store)) -> SlotCalculator:
    return SlotCalculator(store)


def get_booking_service(store: SqlSchedulingStore = Depends(get_store)) -> BookingService:
    return BookingService(store)


def to_http_error(error: SchedulingError) -> HTTPException:
    """Status code for a core error"""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=error.message)
    if isinstance(error, ConflictError):
        return HTTPException(status_code=409, detail={"message": error.message, "reason": error.reason})
    if isinstance(error, StoreFailure):
        return HTTPException(status_code=503, detail="Booking storage is temporarily unavailable")
    return HTTPException(status_code=500, detail=error.message)
