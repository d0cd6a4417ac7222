"""Steps of a reconciliation plan.

A plan is an ordered tuple of steps, each mapping onto exactly one Tracker
Client call. Plans are computed and executed while handling a single event.
"""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class AddLabels:
    """Add labels to an issue."""

    labels: tuple[str, ...]


@dataclass(frozen=True)
class RemoveLabel:
    """Remove one label from an issue."""

    label: str


@dataclass(frozen=True)
class ReplaceAllLabels:
    """Overwrite an issue's labels."""

    labels: tuple[str, ...]


@dataclass(frozen=True)
class AddAssignees:
    """Assign users to an issue."""

    assignees: tuple[str, ...]


@dataclass(frozen=True)
class RemoveAssignees:
    """Unassign users from an issue."""

    assignees: tuple[str, ...]


@dataclass(frozen=True)
class CreateComment:
    """Post a comment on an issue.

    No handler plans this step today; the bot never reports back to the
    tracker. It mirrors the create_comment call of the Tracker Client so a
    plan can express every write the client supports.
    """

    body: str


PlanStep: TypeAlias = AddLabels | RemoveLabel | ReplaceAllLabels | AddAssignees | RemoveAssignees | CreateComment

ReconciliationPlan: TypeAlias = tuple[PlanStep, ...]
