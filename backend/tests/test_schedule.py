from datetime import time

import pytest

from ajanvaraus.exceptions import ValidationError
from ajanvaraus.models import BlockedDate, RegularHours, Service
from ajanvaraus.seed import INITIAL_SERVICES, init_default_services, seed_database
from ajanvaraus.services.schedule import ScheduleService

from .conftest import MONDAY


@pytest.fixture
def schedule(db_session):
    return ScheduleService(db_session)


def test_default_schedule_is_seeded_once(db_session, schedule):
    schedule.init_default_schedule()
    schedule.init_default_schedule()
    assert db_session.query(RegularHours).count() == 7

    week = schedule.get_week_schedule()
    assert week[0]["day_name"] == "Sunday"
    assert not week[0]["is_available"]
    assert week[1]["start_time"] == "10:00:00"
    assert week[6]["end_time"] == "14:00:00"


def test_set_regular_hours_upserts(db_session, schedule):
    schedule.set_regular_hours(3, "08:00", "16:00")
    hours = schedule.set_regular_hours(3, time(9, 30), time(15, 0), is_available=False)
    assert db_session.query(RegularHours).count() == 1
    assert (hours.start_time, hours.end_time, hours.is_available) == (time(9, 30), time(15, 0), False)


@pytest.mark.parametrize("day,start,end", [
    (7, "09:00", "17:00"),
    (-1, "09:00", "17:00"),
    (1, "17:00", "09:00"),
    (1, "09:00", "09:00"),
])
def test_invalid_regular_hours(schedule, day, start, end):
    with pytest.raises(ValidationError):
        schedule.set_regular_hours(day, start, end)


def test_missing_days_are_reported_closed(schedule):
    schedule.set_regular_hours(1, "09:00", "17:00")
    week = schedule.get_week_schedule()
    assert week[1]["is_available"]
    assert week[2] == {
        "day_of_week": 2, "day_name": "Tuesday", "start_time": None, "end_time": None, "is_available": False
    }


def test_special_date_upsert_and_remove(schedule):
    schedule.set_special_date(MONDAY, "10:00", "12:00", note="Short day")
    special = schedule.set_special_date(MONDAY, "11:00", "13:00", is_available=False)
    assert special.start_time == time(11, 0)
    assert special.note is None
    assert schedule.remove_special_date(MONDAY)
    assert not schedule.remove_special_date(MONDAY)


def test_block_and_unblock(db_session, schedule):
    schedule.block_date(MONDAY, "Juhannus")
    schedule.block_date(MONDAY, "Juhannusaatto")
    assert db_session.query(BlockedDate).one().reason == "Juhannusaatto"
    assert [b.date for b in schedule.list_blocked_dates()] == [MONDAY]
    assert schedule.unblock_date(MONDAY)
    assert not schedule.unblock_date(MONDAY)


def test_seed_database(db_session):
    seed_database(db_session)
    assert db_session.query(Service).count() == len(INITIAL_SERVICES)
    assert init_default_services(db_session) == 0
    assert db_session.query(Service).filter(Service.name_fi == "Etähoito").one().duration_minutes == 45
