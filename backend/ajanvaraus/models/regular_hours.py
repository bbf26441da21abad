"""
Regular weekly opening hours
"""
from sqlalchemy import Column, Integer, Time, Boolean, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class RegularHours(Base):
    """Opening hours per weekday"""

    __tablename__ = "regular_hours"

    id = Column(Integer, primary_key=True, index=True)
    day_of_week = Column(Integer, nullable=False, unique=True)  # 0=Sunday, 6=Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        status = "open" if self.is_available else "closed"
        return f"<RegularHours {DAY_NAMES[self.day_of_week]} {self.start_time}-{self.end_time} {status}>"


# Seeded on first start: Mon-Fri 10-18, Sat 10-14, Sunday closed
DEFAULT_REGULAR_HOURS = [
    {"day_of_week": 0, "start_time": "10:00", "end_time": "14:00", "is_available": False},  # Sun
    {"day_of_week": 1, "start_time": "10:00", "end_time": "18:00", "is_available": True},   # Mon
    {"day_of_week": 2, "start_time": "10:00", "end_time": "18:00", "is_available": True},   # Tue
    {"day_of_week": 3, "start_time": "10:00", "end_time": "18:00", "is_available": True},   # Wed
    {"day_of_week": 4, "start_time": "10:00", "end_time": "18:00", "is_available": True},   # Thu
    {"day_of_week": 5, "start_time": "10:00", "end_time": "18:00", "is_available": True},   # Fri
    {"day_of_week": 6, "start_time": "10:00", "end_time": "14:00", "is_available": True},   # Sat
]
