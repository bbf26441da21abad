"""
API router for services, opening days and free slots
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ..exceptions import SchedulingError
from ..services.repository import SqlSchedulingStore
from ..services.slots import SlotCalculator
from ..services.time_utils import format_date_key, parse_date_key
from .dependencies import get_calculator, get_store, to_http_error

router = APIRouter(prefix="/api", tags=["availability"])


# ==================== Pydantic Schemas ====================

class ServiceResponse(BaseModel):
    id: int
    name: str
    name_fi: Optional[str]
    name_en: Optional[str]
    description_fi: Optional[str]
    description_en: Optional[str]
    duration_minutes: int
    price: float
    currency: str

    class Config:
        from_attributes = True


class DayResponse(BaseModel):
    date: str  # "YYYY-MM-DD"
    available: bool
    source: str
    openStart: Optional[str] = None  # "HH:MM:SS"
    openEnd: Optional[str] = None
    reason: Optional[str] = None


class SlotResponse(BaseModel):
    startTime: str  # ISO 8601
    endTime: str


class SlotsResponse(BaseModel):
    date: str
    availableSlots: List[SlotResponse]


class DatesResponse(BaseModel):
    availableDates: List[str]
    blockedDates: List[str]


# ==================== API Endpoints ====================

@router.get("/services", response_model=List[ServiceResponse])
def get_services(store: SqlSchedulingStore = Depends(get_store)):
    """Active services"""
    try:
        return store.list_active_services()
    except SchedulingError as e:
        raise to_http_error(e)


@router.get("/availability/slots", response_model=SlotsResponse)
def get_slots(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
    service_id: int = Query(..., alias="serviceId"),
    step: Optional[int] = Query(None, ge=5, le=120, description="Grid step in minutes"),
    calculator: SlotCalculator = Depends(get_calculator)
):
    """Free start times for a service on a date"""
    try:
        target_date = parse_date_key(date_str)
        slots = calculator.list_slots(target_date, service_id, step)
    except SchedulingError as e:
        raise to_http_error(e)

    return SlotsResponse(
        date=format_date_key(target_date),
        availableSlots=[SlotResponse(**slot.to_dict()) for slot in slots]
    )


@router.get("/availability/dates", response_model=DatesResponse)
def get_dates(
    year: int = Query(..., ge=2020, le=2038),
    month: int = Query(..., ge=1, le=12),
    service_id: int = Query(..., alias="serviceId"),
    calculator: SlotCalculator = Depends(get_calculator)
):
    """Days of a month with at least one free slot"""
    try:
        available, unavailable = calculator.month_overview(year, month, service_id)
    except SchedulingError as e:
        raise to_http_error(e)

    return DatesResponse(
        availableDates=[format_date_key(d) for d in available],
        blockedDates=[format_date_key(d) for d in unavailable]
    )


@router.get("/availability/{date_str}", response_model=DayResponse)
def get_day(date_str: str, calculator: SlotCalculator = Depends(get_calculator)):
    """Effective opening window of a date"""
    try:
        target_date = parse_date_key(date_str)
        day = calculator.resolver.resolve_day(target_date)
    except SchedulingError as e:
        raise to_http_error(e)
    return DayResponse(**day.to_dict())
