"""
Mock booking backend.

Stands in for the Holidaze REST API (``/holidaze/bookings``). It is the
system of record: a booking that passed the calendar's local checks can
still be refused here when another session booked the same days first.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, TypedDict

from holidaze.availability.engine import validate_candidate_range, validate_guest_count
from holidaze.schemas.venue_schema import CreateBookingRequest, VenuePayload
from holidaze.utils import to_iso_timestamp

logger = logging.getLogger(__name__)


class BookingRecord(TypedDict):
    """Full booking record stored in the system."""

    booking_ref: str
    venue_id: str
    dateFrom: str
    dateTo: str
    guests: int
    status: str
    created: str


class BookingResult(TypedDict, total=False):
    """Result from create_booking or cancel_booking."""

    success: bool
    message: str
    booking_ref: str
    details: BookingRecord


_venues: dict[str, VenuePayload] = {}
_bookings: dict[str, BookingRecord] = {}


def register_venue(venue: VenuePayload) -> None:
    """Load a venue and the bookings it already carries."""
    _venues[venue.id] = venue
    for booking in venue.bookings:
        _bookings[booking.id] = {
            "booking_ref": booking.id,
            "venue_id": venue.id,
            "dateFrom": to_iso_timestamp(booking.date_from),
            "dateTo": to_iso_timestamp(booking.date_to),
            "guests": booking.guests,
            "status": "confirmed",
            "created": (booking.created or datetime.now(timezone.utc)).isoformat(),
        }
    logger.debug("Venue %s registered with %d booking(s)", venue.id, len(venue.bookings))


def get_venue_bookings(venue_id: str) -> list[BookingRecord]:
    """Confirmed bookings on a venue, ordered by check-in."""
    records = [
        b for b in _bookings.values()
        if b["venue_id"] == venue_id and b["status"] == "confirmed"
    ]
    return sorted(records, key=lambda b: b["dateFrom"])


def get_venue(venue_id: str) -> Optional[VenuePayload]:
    """Venue record with its current confirmed bookings attached."""
    venue = _venues.get(venue_id)
    if venue is None:
        return None
    bookings = [
        {"id": b["booking_ref"], "dateFrom": b["dateFrom"], "dateTo": b["dateTo"], "guests": b["guests"]}
        for b in get_venue_bookings(venue_id)
    ]
    return VenuePayload.model_validate({
        "id": venue.id,
        "name": venue.name,
        "price": venue.price,
        "maxGuests": venue.max_guests,
        "bookings": bookings,
    })


def create_booking(request: CreateBookingRequest) -> BookingResult:
    """Create a booking after checking it against the stored bookings."""
    venue = _venues.get(request.venue_id)
    if venue is None:
        return {"success": False, "message": f"Venue {request.venue_id} not found."}

    current = get_venue(request.venue_id)
    guest_check = validate_guest_count(request.guests, current.constraints())
    if not guest_check.valid:
        return {
            "success": False,
            "message": f"Guest count must be between 1 and {venue.max_guests}.",
        }

    requested = request.date_range()
    date_check = validate_candidate_range(requested.start, requested.end, current.existing_bookings())
    if not date_check.valid:
        logger.warning(
            "Booking conflict on venue %s for %s..%s",
            request.venue_id, requested.start, requested.end,
        )
        return {
            "success": False,
            "message": "The selected dates are no longer available.",
        }

    ref = uuid.uuid4().hex
    booking: BookingRecord = {
        "booking_ref": ref,
        "venue_id": request.venue_id,
        "dateFrom": request.date_from,
        "dateTo": request.date_to,
        "guests": request.guests,
        "status": "confirmed",
        "created": datetime.now(timezone.utc).isoformat(),
    }
    _bookings[ref] = booking
    logger.info(
        "Booking created: %s on venue %s from %s to %s",
        ref, request.venue_id, requested.start, requested.end,
    )
    return {
        "success": True,
        "booking_ref": ref,
        "message": f"Booking confirmed from {requested.start} to {requested.end}.",
        "details": booking,
    }


def cancel_booking(booking_ref: str) -> BookingResult:
    """Cancel an existing booking; its days become bookable again."""
    if booking_ref not in _bookings:
        return {"success": False, "message": f"Booking {booking_ref} not found."}
    _bookings[booking_ref]["status"] = "cancelled"
    logger.info("Booking cancelled: %s", booking_ref)
    return {"success": True, "message": f"Booking {booking_ref} has been cancelled."}


def get_booking(booking_ref: str) -> Optional[BookingRecord]:
    """Retrieve a booking by reference."""
    return _bookings.get(booking_ref)


def reset() -> None:
    """Clear all venues and bookings. Used by test fixtures for isolation."""
    _venues.clear()
    _bookings.clear()
