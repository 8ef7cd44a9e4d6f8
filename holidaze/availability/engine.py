"""
Date-range availability and booking-conflict engine.

Pure functions over a venue's existing bookings and a candidate
check-in/check-out selection. Nothing here performs I/O or keeps state;
an invalid selection is an ordinary return value, not an exception.

Boundary policy: a booking blocks every day from its check-in to its
check-out, both included, so two bookings can never share a turnover day.

Usage:
    bookings = [ExistingBooking("b1", DateRange(date(2024, 6, 10), date(2024, 6, 15)))]
    evaluate_selection(CandidateSelection(date(2024, 6, 16), date(2024, 6, 20)),
                       bookings, VenueConstraints(max_guests=4, price_per_night=100))
"""

import logging
from collections.abc import Set as AbstractSet
from datetime import date, timedelta
from typing import Iterable, Iterator, Optional, Union

from holidaze.availability.models import (
    BookingStatus,
    CandidateSelection,
    DateRange,
    ExistingBooking,
    Price,
    PriceQuote,
    SelectionEvaluation,
    ValidationVerdict,
    VenueConstraints,
    Violation,
)
from holidaze.utils import as_date

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
MIN_NIGHTS = 1

# Either the raw bookings or a set produced by blocked_dates()
Bookings = Union[Iterable[ExistingBooking], AbstractSet[date]]


def _materialize(bookings: Bookings) -> Union[tuple[ExistingBooking, ...], AbstractSet[date]]:
    if isinstance(bookings, AbstractSet):
        return bookings
    return tuple(bookings)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both included."""
    day = as_date(start)
    end = as_date(end)
    while day <= end:
        yield day
        day += ONE_DAY


def blocked_dates(bookings: Iterable[ExistingBooking]) -> frozenset[date]:
    """Flatten bookings into the set of days they block."""
    days: set[date] = set()
    for booking in bookings:
        days.update(iter_days(booking.range.start, booking.range.end))
    return frozenset(days)


def is_date_blocked(day: date, bookings: Bookings) -> bool:
    """True if any booking covers ``day``, check-in and check-out days included."""
    day = as_date(day)
    if isinstance(bookings, AbstractSet):
        return day in bookings
    return any(day in booking.range for booking in bookings)


def validate_candidate_start(day: date, bookings: Bookings) -> ValidationVerdict:
    """Check a check-in date picked before any check-out date."""
    if is_date_blocked(day, bookings):
        logger.debug("Start %s rejected: already booked", day)
        return ValidationVerdict.reject(Violation.DATE_ALREADY_BOOKED)
    return ValidationVerdict.ok()


def validate_candidate_range(
    start: Optional[date], end: Optional[date], bookings: Bookings
) -> ValidationVerdict:
    """
    Check a full check-in/check-out range against existing bookings.

    A missing date or a check-out before check-in is an incomplete
    selection; the dates are never swapped. Otherwise every day of the
    closed range is checked and the first blocked day rejects the range.
    """
    if start is None or end is None:
        return ValidationVerdict.reject(Violation.INCOMPLETE_SELECTION)

    start, end = as_date(start), as_date(end)
    if end < start:
        logger.debug("Range %s..%s rejected: end precedes start", start, end)
        return ValidationVerdict.reject(Violation.INCOMPLETE_SELECTION)

    bookings = _materialize(bookings)
    for day in iter_days(start, end):
        if is_date_blocked(day, bookings):
            logger.debug("Range %s..%s rejected: %s is booked", start, end, day)
            return ValidationVerdict.reject(Violation.RANGE_OVERLAPS_BOOKING)
    return ValidationVerdict.ok()


def validate_guest_count(guests: int, constraints: VenueConstraints) -> ValidationVerdict:
    """Guests must be between 1 and the venue's capacity."""
    if guests < 1 or guests > constraints.max_guests:
        logger.debug("Guest count %d outside 1..%d", guests, constraints.max_guests)
        return ValidationVerdict.reject(Violation.GUEST_COUNT_OUT_OF_RANGE)
    return ValidationVerdict.ok()


def nights_between(check_in: date, check_out: date) -> int:
    """Absolute day difference between two dates, as shown on trip cards."""
    return abs((as_date(check_out) - as_date(check_in)).days)


def quote_price(start: date, end: date, price_per_night: Price) -> PriceQuote:
    """Price a stay: at least one night, total = nights * nightly rate."""
    if price_per_night < 0:
        raise ValueError("price_per_night cannot be negative")
    nights = max(MIN_NIGHTS, (as_date(end) - as_date(start)).days)
    return PriceQuote(nights=nights, price_per_night=price_per_night, total=nights * price_per_night)


def evaluate_selection(
    selection: CandidateSelection,
    bookings: Bookings,
    constraints: VenueConstraints,
) -> SelectionEvaluation:
    """
    Validate the current calendar selection and price it when complete.

    Guest count is checked separately (see validate_submission).
    """
    if selection.start is None:
        return SelectionEvaluation(ValidationVerdict.reject(Violation.INCOMPLETE_SELECTION))

    if selection.end is None:
        return SelectionEvaluation(validate_candidate_start(selection.start, bookings))

    verdict = validate_candidate_range(selection.start, selection.end, bookings)
    if not verdict.valid:
        return SelectionEvaluation(verdict)

    quote = quote_price(selection.start, selection.end, constraints.price_per_night)
    return SelectionEvaluation(verdict, quote)


def validate_submission(
    selection: CandidateSelection,
    guests: int,
    bookings: Bookings,
    constraints: VenueConstraints,
) -> SelectionEvaluation:
    """
    Gate a booking submission: dates and guest count must both pass.

    The date violation wins when both fail. A selection with only a
    check-in date is not submittable.
    """
    if selection.start is not None and selection.end is None:
        return SelectionEvaluation(ValidationVerdict.reject(Violation.INCOMPLETE_SELECTION))

    evaluation = evaluate_selection(selection, bookings, constraints)
    if not evaluation.valid:
        return evaluation

    guest_verdict = validate_guest_count(guests, constraints)
    if not guest_verdict.valid:
        return SelectionEvaluation(guest_verdict)
    return evaluation


def booking_status(booking_range: DateRange, today: date) -> BookingStatus:
    """Label a booking as upcoming, active (today inside the range) or completed."""
    today = as_date(today)
    if today < booking_range.start:
        return BookingStatus.UPCOMING
    if today in booking_range:
        return BookingStatus.ACTIVE
    return BookingStatus.COMPLETED
