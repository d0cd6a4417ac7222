"""Contains results of event handling."""

from enum import Enum

from triage_bot.reconcile.models import PlanStep


class EventOutcome(str, Enum):
    """How the handling of a single event ended."""

    NOOP = "noop"
    APPLIED = "applied"
    DENIED = "denied"
    NOT_HANDLED = "not_handled"
    IGNORED = "ignored"


class EventHandlingResult:
    """Contains the outcome of handling one event and the tracker changes it made."""

    def __init__(self, outcome: EventOutcome, applied_steps: list[PlanStep] | None = None) -> None:
        """Initialize the result with the outcome and the applied plan steps."""
        self.outcome = outcome
        self.applied_steps = applied_steps or []

    def __repr__(self) -> str:
        return f"EventHandlingResult(outcome={self.outcome.value!r}, applied_steps={self.applied_steps!r})"
