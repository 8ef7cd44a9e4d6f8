"""Value types consumed and produced by the availability engine."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from holidaze.utils import as_date

Price = Union[int, float, Decimal]


class Violation(str, Enum):
    """Reasons a date selection or guest count is rejected."""

    DATE_ALREADY_BOOKED = "date_already_booked"
    RANGE_OVERLAPS_BOOKING = "range_overlaps_booking"
    GUEST_COUNT_OUT_OF_RANGE = "guest_count_out_of_range"
    INCOMPLETE_SELECTION = "incomplete_selection"


class BookingStatus(str, Enum):
    """Where a booking sits relative to today."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class DateRange:
    """Closed interval of calendar days, both ends included."""

    start: date
    end: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_date(self.start))
        object.__setattr__(self, "end", as_date(self.end))
        if self.end < self.start:
            raise ValueError(
                f"DateRange end {self.end.isoformat()} precedes start {self.start.isoformat()}"
            )

    def __contains__(self, day: date) -> bool:
        return self.start <= as_date(day) <= self.end


@dataclass(frozen=True)
class ExistingBooking:
    """A confirmed reservation already held on a venue."""

    id: str
    range: DateRange
    guests: int = 1


@dataclass(frozen=True)
class VenueConstraints:
    """Capacity and nightly rate snapshot taken from the venue record."""

    max_guests: int
    price_per_night: Price

    def __post_init__(self) -> None:
        if self.price_per_night < 0:
            raise ValueError("price_per_night cannot be negative")


@dataclass(frozen=True)
class CandidateSelection:
    """Check-in/check-out pair as currently picked in the calendar."""

    start: Optional[date] = None
    end: Optional[date] = None


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of a single validation call."""

    valid: bool
    violation: Optional[Violation] = None

    @classmethod
    def ok(cls) -> "ValidationVerdict":
        return cls(valid=True)

    @classmethod
    def reject(cls, violation: Violation) -> "ValidationVerdict":
        return cls(valid=False, violation=violation)

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class PriceQuote:
    """Nights and total for a date range at a nightly rate."""

    nights: int
    price_per_night: Price
    total: Price


@dataclass(frozen=True)
class SelectionEvaluation:
    """Verdict for a selection plus its quote when the dates are bookable."""

    verdict: ValidationVerdict
    quote: Optional[PriceQuote] = None

    @property
    def valid(self) -> bool:
        return self.verdict.valid
