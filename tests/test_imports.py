"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestAvailabilityImports:
    def test_package_reexports(self):
        from holidaze.availability import (
            SelectionStateMachine,
            Violation,
            evaluate_selection,
            quote_price,
        )
        assert Violation.DATE_ALREADY_BOOKED == "date_already_booked"
        assert callable(evaluate_selection)
        assert callable(quote_price)
        assert SelectionStateMachine is not None

    def test_import_models(self):
        from holidaze.availability.models import BookingStatus, ValidationVerdict
        assert ValidationVerdict.ok().valid
        assert BookingStatus.ACTIVE == "active"


class TestSchemaImports:
    def test_import_venue_schema(self):
        from holidaze.schemas.venue_schema import BookingPayload, CreateBookingRequest, VenuePayload
        assert BookingPayload is not None
        assert CreateBookingRequest is not None
        assert VenuePayload is not None


class TestToolImports:
    def test_import_booking(self):
        from holidaze.tools.booking import create_booking, reset
        assert callable(create_booking)
        assert callable(reset)


class TestConfigImports:
    def test_settings_singleton(self):
        from holidaze.config import settings
        assert settings.booking.default_guests >= 1
        assert settings.app_name
