"""Tests for the mock booking backend."""

from datetime import date

import pytest
from pydantic import ValidationError

from holidaze.availability.models import CandidateSelection
from holidaze.schemas.venue_schema import CreateBookingRequest
from holidaze.tools.booking import (
    cancel_booking,
    create_booking,
    get_booking,
    get_venue,
    get_venue_bookings,
    register_venue,
)
from tests.conftest import make_venue

JUNE_STAY = {"id": "b1", "dateFrom": "2024-06-10T00:00:00.000Z", "dateTo": "2024-06-15T00:00:00.000Z"}


def _request(start: date, end: date, guests: int = 2, venue_id: str = "venue-1") -> CreateBookingRequest:
    return CreateBookingRequest.from_selection(CandidateSelection(start, end), guests, venue_id)


class TestRegisterVenue:
    def test_existing_bookings_loaded(self):
        register_venue(make_venue(bookings=[JUNE_STAY]))
        records = get_venue_bookings("venue-1")
        assert len(records) == 1
        assert records[0]["booking_ref"] == "b1"

    def test_get_venue_unknown(self):
        assert get_venue("nope") is None


class TestCreateBooking:
    def test_free_dates_booked(self):
        register_venue(make_venue(bookings=[JUNE_STAY]))
        result = create_booking(_request(date(2024, 6, 16), date(2024, 6, 20)))
        assert result["success"]
        assert get_booking(result["booking_ref"])["guests"] == 2
        assert len(get_venue_bookings("venue-1")) == 2

    def test_conflicting_dates_refused(self):
        register_venue(make_venue(bookings=[JUNE_STAY]))
        result = create_booking(_request(date(2024, 6, 15), date(2024, 6, 18)))
        assert not result["success"]
        assert "no longer available" in result["message"]

    def test_guest_count_refused(self):
        register_venue(make_venue(max_guests=2))
        result = create_booking(_request(date(2024, 7, 1), date(2024, 7, 3), guests=3))
        assert not result["success"]
        assert "between 1 and 2" in result["message"]

    def test_unknown_venue(self):
        result = create_booking(_request(date(2024, 7, 1), date(2024, 7, 3), venue_id="ghost"))
        assert not result["success"]
        assert "not found" in result["message"]

    def test_new_booking_appears_on_venue(self):
        register_venue(make_venue())
        create_booking(_request(date(2024, 7, 1), date(2024, 7, 3)))
        venue = get_venue("venue-1")
        assert [b.date_from for b in venue.bookings] == [date(2024, 7, 1)]


class TestCancelBooking:
    def test_cancel_frees_dates(self):
        register_venue(make_venue(bookings=[JUNE_STAY]))
        assert cancel_booking("b1")["success"]
        result = create_booking(_request(date(2024, 6, 12), date(2024, 6, 13)))
        assert result["success"]

    def test_cancel_unknown(self):
        assert not cancel_booking("nope")["success"]


class TestMalformedRequests:
    def test_reversed_body_never_reaches_backend(self):
        register_venue(make_venue())
        with pytest.raises(ValidationError):
            create_booking(CreateBookingRequest.model_validate({
                "dateFrom": "2024-07-04T00:00:00.000Z",
                "dateTo": "2024-07-01T00:00:00.000Z",
                "guests": 2,
                "venueId": "venue-1",
            }))
        assert get_venue_bookings("venue-1") == []

    def test_garbage_date_never_reaches_backend(self):
        register_venue(make_venue())
        with pytest.raises(ValidationError):
            create_booking(CreateBookingRequest.model_validate({
                "dateFrom": "tomorrow",
                "dateTo": "2024-07-04T00:00:00.000Z",
                "guests": 2,
                "venueId": "venue-1",
            }))
        assert get_venue_bookings("venue-1") == []
