"""
Bookable service
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class Service(Base):
    """Treatment offered for booking"""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    name_fi = Column(String(100), nullable=True)
    name_en = Column(String(100), nullable=True)
    description_fi = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), default="EUR", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def localized_name(self, language: str) -> str:
        if language == "en":
            return self.name_en or self.name
        return self.name_fi or self.name

    def __repr__(self):
        return f"<Service {self.name} ({self.duration_minutes} min, {self.price} {self.currency})>"
