"""
Customer booking
"""
from enum import Enum

from sqlalchemy import Column, Integer, ForeignKey, Date, DateTime, String, Text, TIMESTAMP, Index, text
from sqlalchemy.sql import func
from ..database import Base


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Base):
    """Booking of one service at a fixed time window"""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(String(20), default=BookingStatus.CONFIRMED.value, nullable=False)
    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(200), nullable=False)
    customer_phone = Column(String(30), nullable=True)
    notes = Column(Text, nullable=True)
    language = Column(String(2), default="fi", nullable=False)
    cancellation_id = Column(String(36), unique=True, nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        # Last line of defence against two confirmed bookings starting together
        Index(
            "uq_bookings_confirmed_start",
            "start_time",
            unique=True,
            sqlite_where=text("status = 'confirmed'"),
            postgresql_where=text("status = 'confirmed'"),
        ),
    )

    def __repr__(self):
        return f"<Booking {self.start_time}-{self.end_time} (Status: {self.status})>"
