"""Venue and booking payloads exchanged with the Holidaze REST API."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from holidaze.availability.models import (
    CandidateSelection,
    DateRange,
    ExistingBooking,
    VenueConstraints,
)
from holidaze.utils import as_date, parse_iso_date, to_iso_timestamp


def _coerce_day(value: Any) -> Any:
    if isinstance(value, str):
        return parse_iso_date(value)
    if isinstance(value, date):
        return as_date(value)
    return value


class BookingPayload(BaseModel):
    """A booking as listed on a venue (``dateFrom``/``dateTo`` ISO strings)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date_from: date = Field(alias="dateFrom")
    date_to: date = Field(alias="dateTo")
    guests: int = Field(default=1, ge=1)
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _parse_day(cls, value: Any) -> Any:
        return _coerce_day(value)

    @model_validator(mode="after")
    def _check_order(self) -> "BookingPayload":
        if self.date_to < self.date_from:
            raise ValueError("dateTo must not precede dateFrom")
        return self

    def to_domain(self) -> ExistingBooking:
        return ExistingBooking(
            id=self.id,
            range=DateRange(self.date_from, self.date_to),
            guests=self.guests,
        )


class VenuePayload(BaseModel):
    """The subset of a venue record the booking calendar needs."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    price: float = Field(ge=0)
    max_guests: int = Field(alias="maxGuests", ge=1)
    bookings: list[BookingPayload] = Field(default_factory=list)

    def constraints(self) -> VenueConstraints:
        return VenueConstraints(max_guests=self.max_guests, price_per_night=self.price)

    def existing_bookings(self) -> list[ExistingBooking]:
        return [booking.to_domain() for booking in self.bookings]


class CreateBookingRequest(BaseModel):
    """Body of ``POST /holidaze/bookings``."""

    model_config = ConfigDict(populate_by_name=True)

    date_from: str = Field(alias="dateFrom")
    date_to: str = Field(alias="dateTo")
    guests: int = Field(ge=1)
    venue_id: str = Field(alias="venueId")

    @field_validator("date_from", "date_to")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        parse_iso_date(value)
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "CreateBookingRequest":
        if parse_iso_date(self.date_to) < parse_iso_date(self.date_from):
            raise ValueError("dateTo must not precede dateFrom")
        return self

    @classmethod
    def from_selection(
        cls, selection: CandidateSelection, guests: int, venue_id: str
    ) -> "CreateBookingRequest":
        """Build the request body for a complete selection."""
        if selection.start is None or selection.end is None:
            raise ValueError("selection needs both check-in and check-out dates")
        return cls(
            date_from=to_iso_timestamp(selection.start),
            date_to=to_iso_timestamp(selection.end),
            guests=guests,
            venue_id=venue_id,
        )

    def date_range(self) -> DateRange:
        return DateRange(parse_iso_date(self.date_from), parse_iso_date(self.date_to))

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
