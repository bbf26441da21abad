"""
Fully blocked dates
"""
from sqlalchemy import Column, Integer, Date, String, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class BlockedDate(Base):
    """A day closed for bookings (holiday, vacation, sick leave)"""

    __tablename__ = "blocked_dates"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    reason = Column(String(200), nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<BlockedDate {self.date} - {self.reason}>"
