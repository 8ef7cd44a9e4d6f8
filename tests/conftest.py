"""Shared test fixtures and helpers."""

from datetime import date
from typing import Optional

import pytest

from holidaze.availability.models import DateRange, ExistingBooking, VenueConstraints
from holidaze.availability.selection import SelectionStateMachine
from holidaze.schemas.venue_schema import VenuePayload
from holidaze.tools import booking as booking_store


def make_booking(
    start: date,
    end: date,
    booking_id: str = "b-1",
    guests: int = 2,
) -> ExistingBooking:
    """Helper to create an ExistingBooking over [start, end]."""
    return ExistingBooking(id=booking_id, range=DateRange(start, end), guests=guests)


def make_venue(
    venue_id: str = "venue-1",
    price: float = 100,
    max_guests: int = 4,
    bookings: Optional[list[dict]] = None,
) -> VenuePayload:
    """Helper to build a VenuePayload from API-shaped booking dicts."""
    return VenuePayload.model_validate({
        "id": venue_id,
        "name": "Fjord Cabin",
        "price": price,
        "maxGuests": max_guests,
        "bookings": bookings or [],
    })


@pytest.fixture
def june_booking() -> ExistingBooking:
    """A stay from 2024-06-10 to 2024-06-15."""
    return make_booking(date(2024, 6, 10), date(2024, 6, 15))


@pytest.fixture
def bookings(june_booking) -> list[ExistingBooking]:
    return [june_booking]


@pytest.fixture
def constraints() -> VenueConstraints:
    return VenueConstraints(max_guests=4, price_per_night=100)


@pytest.fixture
def selection_machine(bookings, constraints) -> SelectionStateMachine:
    return SelectionStateMachine(bookings, constraints)


@pytest.fixture(autouse=True)
def clean_booking_store():
    booking_store.reset()
    yield
    booking_store.reset()
