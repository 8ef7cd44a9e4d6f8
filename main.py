"""
Command-line check of a booking selection against a venue record.

Reads a venue JSON document as returned by the Holidaze API (either the
bare venue or the ``{"data": ...}`` envelope), then validates the given
check-in/check-out dates and guest count and prints the price quote.

Usage:
    python main.py --venue venue.json --start 2024-07-01 --end 2024-07-04 --guests 2
    python main.py --venue venue.json --start 2024-07-01 --verbose

Exit status: 0 when the selection is bookable, 2 when it is rejected
(including stays longer than MAX_BOOKING_NIGHTS), 1 when the venue file
cannot be read or parsed.
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from holidaze.availability.engine import evaluate_selection, validate_submission
from holidaze.availability.models import CandidateSelection, SelectionEvaluation, Violation
from holidaze.config import settings
from holidaze.schemas.venue_schema import VenuePayload

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_REJECTED = 2

VIOLATION_MESSAGES = {
    Violation.DATE_ALREADY_BOOKED: "The selected check-in date is already booked.",
    Violation.RANGE_OVERLAPS_BOOKING: "The selected dates overlap an existing booking.",
    Violation.GUEST_COUNT_OUT_OF_RANGE: "Guest count must be between 1 and {max_guests}.",
    Violation.INCOMPLETE_SELECTION: "Please select check-in and check-out dates.",
}


def load_venue(path: Path) -> VenuePayload:
    """Load a venue document, unwrapping the API's data envelope."""
    document = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(document, dict) and "data" in document:
        document = document["data"]
    return VenuePayload.model_validate(document)


def format_evaluation(venue: VenuePayload, evaluation: SelectionEvaluation) -> str:
    """Render a verdict and quote the way the booking card shows them."""
    symbol = settings.booking.currency_symbol
    lines = [f"Venue: {venue.name or venue.id}"]
    if not evaluation.valid:
        violation = evaluation.verdict.violation
        message = VIOLATION_MESSAGES[violation].format(max_guests=venue.max_guests)
        lines.append(f"Rejected ({violation.value}): {message}")
        return "\n".join(lines)

    lines.append("Available")
    quote = evaluation.quote
    if quote is not None:
        lines.append(f"{symbol}{quote.price_per_night:g} x {quote.nights} nights")
        lines.append(f"Total: {symbol}{quote.total:g}")
    return "\n".join(lines)


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}") from None


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check a venue booking selection for conflicts and price it."
    )
    parser.add_argument(
        "--venue",
        type=str,
        required=True,
        help="Path to a venue JSON document including its bookings.",
    )
    parser.add_argument("--start", type=_parse_day, required=True, help="Check-in date (YYYY-MM-DD).")
    parser.add_argument("--end", type=_parse_day, default=None, help="Check-out date (YYYY-MM-DD).")
    parser.add_argument(
        "--guests",
        type=int,
        default=settings.booking.default_guests,
        help="Number of guests (default: %(default)s).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    venue_path = Path(args.venue)
    if not venue_path.exists():
        logger.error("Venue file not found: %s", venue_path)
        return EXIT_LOAD_ERROR

    try:
        venue = load_venue(venue_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        logger.error("Could not read venue from %s: %s", venue_path, exc)
        return EXIT_LOAD_ERROR

    if args.end is not None and (args.end - args.start).days > settings.booking.max_booking_nights:
        sys.stdout.write(
            f"Rejected: stays longer than {settings.booking.max_booking_nights} nights are not supported\n"
        )
        return EXIT_REJECTED

    selection = CandidateSelection(start=args.start, end=args.end)
    bookings = venue.existing_bookings()
    constraints = venue.constraints()
    if args.end is None:
        evaluation = evaluate_selection(selection, bookings, constraints)
    else:
        evaluation = validate_submission(selection, args.guests, bookings, constraints)

    logger.debug("Evaluated %s..%s for %d guest(s): %s", args.start, args.end, args.guests, evaluation)
    sys.stdout.write(format_evaluation(venue, evaluation) + "\n")
    return EXIT_OK if evaluation.valid else EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
