from holidaze.availability.engine import (
    blocked_dates,
    booking_status,
    evaluate_selection,
    is_date_blocked,
    quote_price,
    validate_candidate_range,
    validate_candidate_start,
    validate_guest_count,
    validate_submission,
)
from holidaze.availability.models import (
    CandidateSelection,
    DateRange,
    ExistingBooking,
    PriceQuote,
    SelectionEvaluation,
    ValidationVerdict,
    VenueConstraints,
    Violation,
)
from holidaze.availability.selection import (
    SelectionState,
    SelectionStateMachine,
    SelectionTrigger,
)

__all__ = [
    "blocked_dates",
    "booking_status",
    "evaluate_selection",
    "is_date_blocked",
    "quote_price",
    "validate_candidate_range",
    "validate_candidate_start",
    "validate_guest_count",
    "validate_submission",
    "CandidateSelection",
    "DateRange",
    "ExistingBooking",
    "PriceQuote",
    "SelectionEvaluation",
    "ValidationVerdict",
    "VenueConstraints",
    "Violation",
    "SelectionState",
    "SelectionStateMachine",
    "SelectionTrigger",
]
