"""
Date-specific opening hours
"""
from sqlalchemy import Column, Integer, Date, Time, Boolean, String, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class SpecialDate(Base):
    """Opening hours overriding the regular weekday for one date"""

    __tablename__ = "special_dates"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    note = Column(String(200), nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<SpecialDate {self.date} {self.start_time}-{self.end_time} (available: {self.is_available})>"
