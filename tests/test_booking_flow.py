"""Integration tests: selection state machine + payload schemas + booking backend."""

from datetime import date

from holidaze.availability.selection import SelectionState, SelectionStateMachine
from holidaze.availability.models import Violation
from holidaze.schemas.venue_schema import CreateBookingRequest
from holidaze.tools.booking import create_booking, get_venue, register_venue
from tests.conftest import make_venue

JUNE_STAY = {"id": "b1", "dateFrom": "2024-06-10T00:00:00.000Z", "dateTo": "2024-06-15T00:00:00.000Z"}


def _open_calendar(venue_id: str = "venue-1") -> SelectionStateMachine:
    venue = get_venue(venue_id)
    return SelectionStateMachine(venue.existing_bookings(), venue.constraints())


def _submit(sm: SelectionStateMachine, guests: int, venue_id: str = "venue-1") -> bool:
    """Submit the selection and feed the backend's answer back to the machine."""
    if not sm.submit(guests).valid:
        return False
    request = CreateBookingRequest.from_selection(sm.selection, guests, venue_id)
    result = create_booking(request)
    sm.record_booking_result(result["success"])
    return result["success"]


class TestFullBookingFlow:
    def test_happy_path(self):
        register_venue(make_venue(bookings=[JUNE_STAY]))
        sm = _open_calendar()

        assert sm.pick_date(date(2024, 6, 12)).verdict.violation == Violation.DATE_ALREADY_BOOKED
        assert sm.current_state == SelectionState.EMPTY

        sm.pick_date(date(2024, 6, 16))
        evaluation = sm.pick_date(date(2024, 6, 20))
        assert evaluation.quote.nights == 4
        assert evaluation.quote.total == 400

        assert _submit(sm, guests=2)
        assert sm.current_state == SelectionState.EMPTY
        assert len(get_venue("venue-1").bookings) == 2

    def test_rejected_range_then_retry(self):
        register_venue(make_venue(bookings=[JUNE_STAY]))
        sm = _open_calendar()

        sm.pick_date(date(2024, 6, 8))
        sm.pick_date(date(2024, 6, 11))
        assert sm.current_state == SelectionState.EMPTY

        sm.pick_date(date(2024, 6, 5))
        assert sm.pick_date(date(2024, 6, 9)).valid
        assert _submit(sm, guests=1)


class TestConcurrentSessions:
    def test_second_session_refused_by_backend(self):
        register_venue(make_venue())
        first = _open_calendar()
        second = _open_calendar()

        for sm in (first, second):
            sm.pick_date(date(2024, 8, 1))
            sm.pick_date(date(2024, 8, 5))

        assert _submit(first, guests=2)
        assert not _submit(second, guests=2)
        assert second.current_state == SelectionState.COMPLETE

    def test_loser_adjusts_after_refresh(self):
        register_venue(make_venue())
        first = _open_calendar()
        second = _open_calendar()
        for sm in (first, second):
            sm.pick_date(date(2024, 8, 1))
            sm.pick_date(date(2024, 8, 5))
        _submit(first, guests=2)
        _submit(second, guests=2)

        second.update_bookings(get_venue("venue-1").existing_bookings())
        assert not second.is_date_selectable(date(2024, 8, 5))
        second.pick_date(date(2024, 8, 6))
        second.pick_date(date(2024, 8, 9))
        assert _submit(second, guests=2)
