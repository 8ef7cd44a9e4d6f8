"""
State machine for the booking calendar's check-in/check-out selection.

The selection moves EMPTY -> START_ONLY -> COMPLETE -> SUBMITTED and back
to EMPTY once the booking is created. A rejected second date resets the
selection to EMPTY so it is never left half-set; a failed booking call
returns it to COMPLETE so the user can retry or adjust.

Usage:
    sm = SelectionStateMachine(bookings, VenueConstraints(max_guests=4, price_per_night=100))
    sm.pick_date(date(2024, 7, 1))
    evaluation = sm.pick_date(date(2024, 7, 4))
    assert evaluation.quote.nights == 3
    if sm.submit(guests=2).valid:
        ...  # hand sm.selection to the booking API
        sm.record_booking_result(success=True)
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterable, Optional

from holidaze.availability.engine import (
    blocked_dates,
    evaluate_selection,
    validate_candidate_start,
    validate_submission,
)
from holidaze.availability.models import (
    CandidateSelection,
    ExistingBooking,
    SelectionEvaluation,
    ValidationVerdict,
    VenueConstraints,
)
from holidaze.logging_context import get_session_logger, new_session_id, session_scope
from holidaze.utils import as_date

logger = get_session_logger(__name__)


class SelectionState(str, Enum):
    """Lifecycle states of a calendar selection."""
    EMPTY = "empty"
    START_ONLY = "start_only"
    COMPLETE = "complete"
    SUBMITTED = "submitted"


class SelectionTrigger(str, Enum):
    """Events that move a selection between states."""
    START_PICKED = "start_picked"
    END_PICKED = "end_picked"
    RANGE_REJECTED = "range_rejected"
    SUBMIT = "submit"
    BOOKING_SUCCEEDED = "booking_succeeded"
    BOOKING_FAILED = "booking_failed"
    CANCEL = "cancel"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: SelectionState
    to_state: SelectionState
    trigger: SelectionTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: SelectionState
    entered_at: datetime
    trigger: Optional[SelectionTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a trigger is not valid from the current state."""


class SelectionStateMachine:
    """
    Tracks one user's date selection on one venue.

    Every date pick is validated by the availability engine against the
    venue's booking snapshot; the verdict is returned so the calendar can
    show an inline message.
    """

    TRANSITIONS: list[Transition] = [
        # --- Picking dates ---
        Transition(SelectionState.EMPTY, SelectionState.START_ONLY,
                   SelectionTrigger.START_PICKED),
        Transition(SelectionState.START_ONLY, SelectionState.COMPLETE,
                   SelectionTrigger.END_PICKED),
        Transition(SelectionState.START_ONLY, SelectionState.EMPTY,
                   SelectionTrigger.RANGE_REJECTED),
        # A click on a complete range starts a new one
        Transition(SelectionState.COMPLETE, SelectionState.START_ONLY,
                   SelectionTrigger.START_PICKED),

        # --- Submission ---
        Transition(SelectionState.COMPLETE, SelectionState.SUBMITTED,
                   SelectionTrigger.SUBMIT),
        Transition(SelectionState.SUBMITTED, SelectionState.EMPTY,
                   SelectionTrigger.BOOKING_SUCCEEDED),
        Transition(SelectionState.SUBMITTED, SelectionState.COMPLETE,
                   SelectionTrigger.BOOKING_FAILED),

        # --- Cancel ---
        Transition(SelectionState.EMPTY, SelectionState.EMPTY,
                   SelectionTrigger.CANCEL),
        Transition(SelectionState.START_ONLY, SelectionState.EMPTY,
                   SelectionTrigger.CANCEL),
        Transition(SelectionState.COMPLETE, SelectionState.EMPTY,
                   SelectionTrigger.CANCEL),
    ]

    def __init__(
        self,
        bookings: Iterable[ExistingBooking],
        constraints: VenueConstraints,
        session_id: Optional[str] = None,
    ) -> None:
        self.session_id = session_id or new_session_id()
        self._blocked = blocked_dates(bookings)
        self._constraints = constraints
        self._current_state = SelectionState.EMPTY
        self._start: Optional[date] = None
        self._end: Optional[date] = None
        self._last_verdict: Optional[ValidationVerdict] = None
        self._history: list[StateEntry] = [
            StateEntry(state=SelectionState.EMPTY, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> SelectionState:
        return self._current_state

    @property
    def selection(self) -> CandidateSelection:
        return CandidateSelection(start=self._start, end=self._end)

    @property
    def constraints(self) -> VenueConstraints:
        return self._constraints

    @property
    def last_verdict(self) -> Optional[ValidationVerdict]:
        """Verdict of the most recent pick or submit, for inline error display."""
        return self._last_verdict

    def update_bookings(self, bookings: Iterable[ExistingBooking]) -> None:
        """Replace the booking snapshot, e.g. after re-fetching the venue."""
        self._blocked = blocked_dates(bookings)
        with session_scope(self.session_id):
            logger.debug(
                "[%s] Booking snapshot refreshed: %d blocked day(s)",
                self.session_id, len(self._blocked),
            )

    def is_date_selectable(self, day: date, today: Optional[date] = None) -> bool:
        """
        Calendar filter: False for days the picker should grey out.

        Booked days are never selectable; with ``today`` given, past days
        are not either.
        """
        day = as_date(day)
        if today is not None and day < as_date(today):
            return False
        return day not in self._blocked

    def pick_date(self, day: date) -> SelectionEvaluation:
        """
        Apply a calendar click.

        In EMPTY or COMPLETE the day becomes the new check-in; an invalid
        check-in leaves the state unchanged. In START_ONLY the day is the
        check-out; an invalid range resets the selection to EMPTY.
        """
        if self._current_state == SelectionState.START_ONLY:
            return self._pick_end(day)
        if self._current_state in (SelectionState.EMPTY, SelectionState.COMPLETE):
            return self._pick_start(day)
        raise InvalidTransitionError(
            f"Cannot pick a date while in '{self._current_state.value}'"
        )

    def _pick_start(self, day: date) -> SelectionEvaluation:
        verdict = validate_candidate_start(day, self._blocked)
        self._last_verdict = verdict
        if not verdict.valid:
            return SelectionEvaluation(verdict)

        self.transition(SelectionTrigger.START_PICKED)
        self._start, self._end = as_date(day), None
        return SelectionEvaluation(verdict)

    def _pick_end(self, day: date) -> SelectionEvaluation:
        candidate = CandidateSelection(start=self._start, end=day)
        evaluation = evaluate_selection(candidate, self._blocked, self._constraints)
        self._last_verdict = evaluation.verdict
        if not evaluation.valid:
            self.transition(SelectionTrigger.RANGE_REJECTED)
            self._clear()
            return evaluation

        self.transition(SelectionTrigger.END_PICKED)
        self._end = as_date(day)
        return evaluation

    def submit(self, guests: int) -> SelectionEvaluation:
        """
        Gate submission of a COMPLETE selection.

        Dates are re-checked against the current snapshot together with the
        guest count; only when both pass does the selection move to SUBMITTED.
        """
        if self._current_state != SelectionState.COMPLETE:
            raise InvalidTransitionError(
                f"Cannot submit from '{self._current_state.value}'; select both dates first"
            )

        evaluation = validate_submission(self.selection, guests, self._blocked, self._constraints)
        self._last_verdict = evaluation.verdict
        if evaluation.valid:
            self.transition(SelectionTrigger.SUBMIT)
        return evaluation

    def record_booking_result(self, success: bool) -> SelectionState:
        """Apply the booking API's answer to a submitted selection."""
        if success:
            self.transition(SelectionTrigger.BOOKING_SUCCEEDED)
            self._clear()
        else:
            self.transition(SelectionTrigger.BOOKING_FAILED)
        return self._current_state

    def cancel(self) -> SelectionState:
        """Drop the current selection."""
        self.transition(SelectionTrigger.CANCEL)
        self._clear()
        self._last_verdict = None
        return self._current_state

    def _clear(self) -> None:
        self._start = None
        self._end = None

    def transition(self, trigger: SelectionTrigger) -> SelectionState:
        """
        Execute a state transition.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))
                with session_scope(self.session_id):
                    logger.debug(
                        "[%s] Selection transition: %s -> %s (trigger: %s)",
                        self.session_id, old_state.value, self._current_state.value, trigger.value,
                    )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[SelectionTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]
