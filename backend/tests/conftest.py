from datetime import date, datetime, time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ajanvaraus import models  # noqa: F401
from ajanvaraus.database import Base
from ajanvaraus.services.availability import AvailabilityResolver
from ajanvaraus.services.bookings import BookingService
from ajanvaraus.services.slots import SlotCalculator

from .fakes import InMemorySchedulingStore

# Friday noon; 2025-06-01 is a Sunday, 2025-06-02 a Monday
NOW = datetime(2025, 5, 30, 12, 0)
SUNDAY = date(2025, 6, 1)
MONDAY = date(2025, 6, 2)
TUESDAY = date(2025, 6, 3)
YESTERDAY = date(2025, 5, 29)


def fixed_now():
    return NOW


@pytest.fixture
def store():
    """Mon-Fri 09-17, Sat 10-14, Sunday without a rule; one 60 min service"""
    fake = InMemorySchedulingStore()
    for day_of_week in range(1, 6):
        fake.set_regular(day_of_week, time(9, 0), time(17, 0))
    fake.set_regular(6, time(10, 0), time(14, 0))
    fake.add_service(1, duration=60)
    fake.add_service(2, duration=45)
    fake.add_service(3, duration=30, active=False)
    return fake


@pytest.fixture
def resolver(store):
    return AvailabilityResolver(store, now=fixed_now)


@pytest.fixture
def calculator(store, resolver):
    return SlotCalculator(store, resolver=resolver)


@pytest.fixture
def bookings(store, calculator):
    return BookingService(store, calculator=calculator)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
