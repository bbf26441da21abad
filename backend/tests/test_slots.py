from datetime import date, datetime, time, timedelta

import pytest

from ajanvaraus.exceptions import ServiceNotFound, ValidationError
from ajanvaraus.models import BookingStatus
from ajanvaraus.services.availability import AvailabilityResolver
from ajanvaraus.services.slots import SlotCalculator, SlotRejection
from ajanvaraus.services.time_utils import TimeWindow

from .conftest import MONDAY, NOW, SUNDAY, YESTERDAY, fixed_now


def at(day, hour, minute=0):
    return datetime.combine(day, time(hour, minute))


def starts(slots):
    return [s.start.strftime("%H:%M") for s in slots]


class TestListSlots:

    def test_full_day_on_thirty_minute_grid(self, calculator):
        slots = calculator.list_slots(MONDAY, 1, step_minutes=30)
        assert starts(slots) == [
            "09:00", "09:30", "10:00", "10:30", "11:00", "11:30", "12:00", "12:30",
            "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00",
        ]
        assert slots[-1].end == at(MONDAY, 17)

    def test_default_step_is_fifteen_minutes(self, calculator):
        slots = calculator.list_slots(MONDAY, 1)
        assert slots[1].start - slots[0].start == timedelta(minutes=15)
        assert slots[-1].start == at(MONDAY, 16)

    def test_slot_ending_exactly_at_closing_is_included(self, calculator):
        slots = calculator.list_slots(MONDAY, 2, step_minutes=15)
        assert slots[-1] == TimeWindow(at(MONDAY, 16, 15), at(MONDAY, 17))

    def test_confirmed_booking_removes_overlapping_slots(self, store, calculator):
        store.add_booking(at(MONDAY, 10), at(MONDAY, 11))
        result = starts(calculator.list_slots(MONDAY, 1, step_minutes=30))
        # 09:00 touches the booking, 09:30 and 10:00 and 10:30 overlap it
        assert "09:00" in result
        assert "09:30" not in result
        assert "10:00" not in result
        assert "10:30" not in result
        assert "11:00" in result

    def test_cancelled_and_completed_bookings_do_not_block(self, store, calculator):
        store.add_booking(at(MONDAY, 10), at(MONDAY, 11), status=BookingStatus.CANCELLED)
        store.add_booking(at(MONDAY, 12), at(MONDAY, 13), status=BookingStatus.COMPLETED)
        assert len(calculator.list_slots(MONDAY, 1, step_minutes=30)) == 15

    def test_bookings_of_other_services_block_too(self, store, calculator):
        store.add_booking(at(MONDAY, 9), at(MONDAY, 17), service_id=2)
        assert calculator.list_slots(MONDAY, 1) == []

    def test_blocked_date_has_no_slots(self, store, calculator):
        store.set_special(MONDAY, time(9, 0), time(17, 0))
        store.block(MONDAY)
        assert calculator.list_slots(MONDAY, 1) == []

    def test_unavailable_days_yield_empty_list(self, calculator):
        assert calculator.list_slots(SUNDAY, 1) == []
        assert calculator.list_slots(YESTERDAY, 1) == []

    def test_window_shorter_than_service(self, store, calculator):
        store.set_special(MONDAY, time(9, 0), time(9, 45))
        assert calculator.list_slots(MONDAY, 1) == []

    def test_unknown_or_inactive_service(self, calculator):
        with pytest.raises(ServiceNotFound):
            calculator.list_slots(MONDAY, 99)
        with pytest.raises(ServiceNotFound):
            calculator.list_slots(MONDAY, 3)

    def test_step_must_be_positive(self, calculator):
        with pytest.raises(ValidationError):
            calculator.list_slots(MONDAY, 1, step_minutes=0)

    def test_listing_is_idempotent(self, store, calculator):
        store.add_booking(at(MONDAY, 13), at(MONDAY, 14, 30))
        assert calculator.list_slots(MONDAY, 1) == calculator.list_slots(MONDAY, 1)

    def test_slots_stay_inside_window_and_clear_of_bookings(self, store, calculator):
        store.set_special(MONDAY, time(8, 30), time(15, 45))
        store.add_booking(at(MONDAY, 9, 15), at(MONDAY, 10, 0))
        store.add_booking(at(MONDAY, 12, 0), at(MONDAY, 12, 45))
        busy = store.find_confirmed_bookings(MONDAY)
        for slot in calculator.list_slots(MONDAY, 2):
            assert slot.start >= at(MONDAY, 8, 30)
            assert slot.end <= at(MONDAY, 15, 45)
            assert not any(slot.overlaps(b) for b in busy)


class TestCheckSlot:

    def test_free_slot(self, calculator):
        check = calculator.check_slot(at(MONDAY, 10), 1)
        assert check.available
        assert check.end_time == at(MONDAY, 11)

    def test_overlap_and_touching(self, store, calculator):
        store.add_booking(at(MONDAY, 10), at(MONDAY, 11))

        overlapping = calculator.check_slot(at(MONDAY, 10, 30), 1)
        assert not overlapping.available
        assert overlapping.reason == SlotRejection.OVERLAP

        touching = calculator.check_slot(at(MONDAY, 11), 1)
        assert touching.available
        assert touching.end_time == at(MONDAY, 12)

    def test_blocked_date(self, store, calculator):
        store.block(MONDAY, reason="Loma")
        for hour in (9, 12, 16):
            assert calculator.check_slot(at(MONDAY, hour), 1).reason == SlotRejection.DATE_BLOCKED

    def test_past_date_regardless_of_hours(self, store, calculator):
        store.set_special(YESTERDAY, time(0, 0), time(23, 0))
        check = calculator.check_slot(at(YESTERDAY, 10), 1)
        assert not check.available
        assert check.reason == SlotRejection.PAST_DATE

    def test_service_not_found(self, calculator):
        assert calculator.check_slot(at(MONDAY, 10), 3).reason == SlotRejection.SERVICE_NOT_FOUND

    def test_day_without_hours(self, calculator):
        assert calculator.check_slot(at(SUNDAY, 10), 1).reason == SlotRejection.OUTSIDE_AVAILABLE_HOURS

    def test_start_outside_opening_hours(self, calculator):
        assert calculator.check_slot(at(MONDAY, 8, 45), 1).reason == SlotRejection.STARTS_OUTSIDE_HOURS
        assert calculator.check_slot(at(MONDAY, 17), 1).reason == SlotRejection.STARTS_OUTSIDE_HOURS

    def test_end_after_closing(self, calculator):
        assert calculator.check_slot(at(MONDAY, 16, 30), 1).reason == SlotRejection.ENDS_AFTER_CLOSING
        assert calculator.check_slot(at(MONDAY, 16), 1).available

    def test_checks_run_in_order(self, store, calculator):
        # Blocked and unknown service on the same call: service is checked first
        store.block(MONDAY)
        assert calculator.check_slot(at(MONDAY, 10), 99).reason == SlotRejection.SERVICE_NOT_FOUND

    def test_off_grid_start_is_accepted(self, calculator):
        assert calculator.check_slot(at(MONDAY, 10, 7), 1).available

    def test_every_listed_slot_passes_the_check(self, store, calculator):
        store.add_booking(at(MONDAY, 11, 15), at(MONDAY, 12, 0))
        store.add_booking(at(MONDAY, 14, 0), at(MONDAY, 15, 0))
        for step in (15, 30):
            for slot in calculator.list_slots(MONDAY, 2, step_minutes=step):
                check = calculator.check_slot(slot.start, 2)
                assert check.available
                assert check.end_time == slot.end


class TestDateOverview:

    def test_month_overview(self, store, calculator):
        store.block(date(2025, 6, 3))
        store.add_booking(at(date(2025, 6, 4), 9), at(date(2025, 6, 4), 17))
        available, unavailable = calculator.month_overview(2025, 6, 1)

        assert len(available) + len(unavailable) == 30
        assert date(2025, 6, 2) in available
        assert date(2025, 6, 3) in unavailable   # blocked
        assert date(2025, 6, 4) in unavailable   # fully booked
        assert SUNDAY in unavailable              # no rule
        assert date(2025, 6, 7) in available      # Saturday 10-14

    def test_past_days_are_unavailable(self, calculator):
        available, unavailable = calculator.month_overview(2025, 5, 1)
        assert date(2025, 5, 29) in unavailable
        assert NOW.date() in available
        assert all(d >= NOW.date() for d in available)

    def test_unknown_service(self, calculator):
        with pytest.raises(ServiceNotFound):
            calculator.month_overview(2025, 6, 99)

    def test_invalid_month(self, calculator):
        with pytest.raises(ValidationError):
            calculator.month_overview(2025, 13, 1)


class TestEarlierToday:
    """Friday afternoon: the morning of the same day is already gone"""

    @pytest.fixture
    def afternoon(self, store):
        return SlotCalculator(store, now=lambda: at(NOW.date(), 15))

    def test_started_time_today_is_rejected(self, afternoon):
        today = NOW.date()
        assert afternoon.check_slot(at(today, 9), 1).reason == SlotRejection.PAST_DATE
        assert afternoon.check_slot(at(today, 14, 59), 1).reason == SlotRejection.PAST_DATE
        assert afternoon.check_slot(at(today, 15), 1).available

    def test_listing_skips_started_slots(self, afternoon):
        slots = afternoon.list_slots(NOW.date(), 1, step_minutes=30)
        assert starts(slots) == ["15:00", "15:30", "16:00"]
        for slot in slots:
            assert afternoon.check_slot(slot.start, 1).available

    def test_later_days_are_unaffected(self, afternoon):
        assert len(afternoon.list_slots(MONDAY, 1, step_minutes=30)) == 15


class TestBookingHorizon:

    def test_month_beyond_horizon_is_unavailable(self, calculator):
        # 60 days from Friday 2025-05-30 is 2025-07-29
        available, unavailable = calculator.month_overview(2025, 8, 1)
        assert available == []
        assert len(unavailable) == 31

        available, _ = calculator.month_overview(2025, 7, 1)
        assert date(2025, 7, 29) in available     # Tuesday, last bookable date
        assert date(2025, 7, 30) not in available

    def test_check_beyond_horizon(self, store):
        calculator = SlotCalculator(store, resolver=AvailabilityResolver(store, now=fixed_now, days_ahead=3))
        assert calculator.check_slot(at(MONDAY, 10), 1).available
        tuesday = MONDAY + timedelta(days=1)
        assert calculator.check_slot(at(tuesday, 10), 1).reason == SlotRejection.OUTSIDE_AVAILABLE_HOURS
        assert calculator.list_slots(tuesday, 1) == []


def test_clock_is_given_once(store, resolver):
    with pytest.raises(ValueError):
        SlotCalculator(store, resolver=resolver, now=fixed_now)
    # The calculator reads the resolver's clock
    assert SlotCalculator(store, resolver=resolver).resolver.now() == NOW
