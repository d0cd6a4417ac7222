"""Plans label and assignee changes for commands.

The planning functions are pure: callers read the issue's current labels and
the repository's label vocabulary and pass them in.

Both the bug toggle and label edits decide from a label read made before the
write, so two deliveries handled concurrently for the same issue can race.
Callers that need stronger guarantees must serialize handling per issue.
"""

from collections.abc import Iterable

import structlog
from typing_extensions import assert_never

from triage_bot.commands.models import BugToggle, Claim, LabelEdit, MarkNeedsAuthor, MarkReady, TriageNeeded, Unclaim
from triage_bot.events.models import ActorIdentity
from triage_bot.reconcile.models import (
    AddAssignees,
    AddLabels,
    PlanStep,
    ReconciliationPlan,
    RemoveAssignees,
    RemoveLabel,
    ReplaceAllLabels,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

BUG_LABEL = "bug"
READY_LABEL = "ready"
NEEDS_AUTHOR_LABEL = "needs-author"
TRIAGE_NEEDED_LABEL = "triage-needed"

# label added, label removed
SIMPLE_COMMAND_LABELS: dict[type[MarkReady | MarkNeedsAuthor | TriageNeeded], tuple[str, str | None]] = {
    MarkReady: (READY_LABEL, NEEDS_AUTHOR_LABEL),
    MarkNeedsAuthor: (NEEDS_AUTHOR_LABEL, READY_LABEL),
    TriageNeeded: (TRIAGE_NEEDED_LABEL, None),
}


def sorted_labels(labels: Iterable[str]) -> tuple[str, ...]:
    """Return unique label names in lexicographic order."""
    return tuple(sorted(set(labels)))


def plan_simple_command(command: MarkReady | MarkNeedsAuthor | TriageNeeded) -> ReconciliationPlan:
    """Plan a fixed label add, followed by an optional fixed label removal."""
    added, removed = SIMPLE_COMMAND_LABELS[type(command)]
    steps: list[PlanStep] = [AddLabels(labels=(added,))]
    if removed is not None:
        steps.append(RemoveLabel(label=removed))
    return tuple(steps)


def plan_bug_toggle(current_labels: Iterable[str]) -> ReconciliationPlan:
    """Remove the bug label if it is applied, otherwise add it."""
    if BUG_LABEL in set(current_labels):
        return (RemoveLabel(label=BUG_LABEL),)
    return (AddLabels(labels=(BUG_LABEL,)),)


def compute_desired_labels(edit: LabelEdit, current_labels: Iterable[str], vocabulary: Iterable[str]) -> frozenset[str]:
    """Return (current | adds) - removes, considering only labels in the vocabulary."""
    known = frozenset(vocabulary)
    adds = edit.adds & known
    removes = edit.removes & known
    ignored = (edit.adds | edit.removes) - known
    if ignored:
        logger.info("Ignoring labels missing from the repository vocabulary", labels=sorted(ignored))
    return (frozenset(current_labels) | adds) - removes


def plan_label_edit(edit: LabelEdit, current_labels: Iterable[str], vocabulary: Iterable[str]) -> ReconciliationPlan:
    """Plan a single full replacement of the issue's labels.

    Returns an empty plan when the edit would not change the current labels.
    """
    current = frozenset(current_labels)
    desired = compute_desired_labels(edit, current, vocabulary)
    if desired == current:
        logger.debug("Label edit leaves labels unchanged", labels=sorted(current))
        return ()
    return (ReplaceAllLabels(labels=sorted_labels(desired)),)


def plan_assignment(command: Claim | Unclaim, actor: ActorIdentity) -> ReconciliationPlan:
    """Assign or unassign the commenting actor."""
    match command:
        case Claim():
            return (AddAssignees(assignees=(actor.login,)),)
        case Unclaim():
            return (RemoveAssignees(assignees=(actor.login,)),)
        case _:
            assert_never(command)
