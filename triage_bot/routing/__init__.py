"""Routes decoded events to the bot's handlers."""

from .results import EventHandlingResult, EventOutcome
from .router import EventRouter, TrackerClientFactory

__all__ = [
    "EventHandlingResult",
    "EventOutcome",
    "EventRouter",
    "TrackerClientFactory",
]
