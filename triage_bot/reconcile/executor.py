"""Applies reconciliation plans through a Tracker Client."""

import structlog
from typing_extensions import assert_never

from triage_bot.github.abc import TrackerClientBase
from triage_bot.reconcile.models import (
    AddAssignees,
    AddLabels,
    CreateComment,
    PlanStep,
    ReconciliationPlan,
    RemoveAssignees,
    RemoveLabel,
    ReplaceAllLabels,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def apply_step(client: TrackerClientBase, issue_number: int, step: PlanStep) -> None:
    """Issue the Tracker Client call for a single plan step."""
    match step:
        case AddLabels(labels=labels):
            await client.add_labels(issue_number, list(labels))
        case RemoveLabel(label=label):
            await client.remove_label(issue_number, label)
        case ReplaceAllLabels(labels=labels):
            await client.replace_all_labels(issue_number, list(labels))
        case AddAssignees(assignees=assignees):
            await client.add_assignees(issue_number, list(assignees))
        case RemoveAssignees(assignees=assignees):
            await client.remove_assignees(issue_number, list(assignees))
        case CreateComment(body=body):
            await client.create_comment(issue_number, body)
        case _:
            assert_never(step)


async def execute_plan(client: TrackerClientBase, issue_number: int, plan: ReconciliationPlan) -> list[PlanStep]:
    """Apply each step in order, stopping at the first failure.

    Returns the steps that were applied. A failing step raises
    TrackerCallFailure and no later step is attempted.
    """
    applied: list[PlanStep] = []
    for step in plan:
        logger.info("Applying plan step", issue_number=issue_number, step=step)
        await apply_step(client, issue_number, step)
        applied.append(step)
    return applied
