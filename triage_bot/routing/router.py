"""Routes decoded events to the bot's handlers.

Each event is handled on its own: the router holds only the configuration and
the client factory it was constructed with, never state derived from earlier
events.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol

import structlog
from typing_extensions import assert_never

from triage_bot.authorization.gate import may_issue_commands
from triage_bot.commands.models import BugToggle, Claim, Command, LabelEdit, MarkNeedsAuthor, MarkReady, TriageNeeded, Unclaim
from triage_bot.commands.parser import parse_commands
from triage_bot.configuration.models import BotConfig
from triage_bot.events.models import (
    Event,
    IssueCommentCreatedEvent,
    IssueOpenedEvent,
    OtherEvent,
    PingEvent,
    PullRequestEditedEvent,
    PullRequestOpenedEvent,
    PullRequestReopenedEvent,
    RepositoryEventBase,
)
from triage_bot.github.abc import TrackerClientBase
from triage_bot.reconcile.executor import execute_plan
from triage_bot.reconcile.file_paths import labels_for_changed_files
from triage_bot.reconcile.labels import (
    plan_assignment,
    plan_bug_toggle,
    plan_label_edit,
    plan_simple_command,
    sorted_labels,
)
from triage_bot.reconcile.models import AddLabels, PlanStep, ReconciliationPlan
from triage_bot.routing.results import EventHandlingResult, EventOutcome

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class TrackerClientFactory(Protocol):
    """Resolves a Tracker Client for a repository and installation."""

    async def __call__(self, repository: str, installation_id: int | None) -> TrackerClientBase: ...


class EventRouter:
    """Dispatches each event to its handler and returns the outcome."""

    def __init__(self, config: BotConfig, client_factory: TrackerClientFactory) -> None:
        """Initialize the router with the bot configuration and a Tracker Client factory."""
        self.config = config
        self.client_factory = client_factory

    async def route(self, event: Event) -> EventHandlingResult:
        """Handle one event.

        Raises:
            TrackerCallFailure: If any tracker call fails. Steps planned after
                the failing call are not attempted.
        """
        match event:
            case PingEvent():
                logger.info("Received ping", delivery_id=event.delivery_id, hook_id=event.hook_id, zen=event.zen)
                return EventHandlingResult(EventOutcome.NOOP)
            case IssueOpenedEvent():
                return await self._handle_issue_opened(event)
            case IssueCommentCreatedEvent():
                return await self._handle_issue_comment(event)
            case PullRequestOpenedEvent() | PullRequestReopenedEvent():
                return await self._handle_pull_request_opened(event)
            case PullRequestEditedEvent():
                logger.warning(
                    "Pull request edits are not implemented",
                    delivery_id=event.delivery_id,
                    repository=event.repository,
                    pull_number=event.pull_number,
                )
                return EventHandlingResult(EventOutcome.NOT_HANDLED)
            case OtherEvent():
                logger.info(
                    "Ignoring event",
                    delivery_id=event.delivery_id,
                    event_name=event.name,
                    action=event.action,
                    repository=event.repository,
                )
                return EventHandlingResult(EventOutcome.IGNORED)
            case _:
                assert_never(event)

    @asynccontextmanager
    async def _client_for(self, event: RepositoryEventBase) -> AsyncIterator[TrackerClientBase]:
        """Resolve the event's Tracker Client and close it once the event is handled."""
        client = await self.client_factory(event.repository, event.installation_id)
        try:
            yield client
        finally:
            await client.close()

    async def _handle_issue_opened(self, event: IssueOpenedEvent) -> EventHandlingResult:
        logger.info("Flagging new issue for triage", repository=event.repository, issue_number=event.issue_number)
        async with self._client_for(event) as client:
            applied = await execute_plan(client, event.issue_number, plan_simple_command(TriageNeeded()))
        return EventHandlingResult(EventOutcome.APPLIED, applied)

    async def _handle_issue_comment(self, event: IssueCommentCreatedEvent) -> EventHandlingResult:
        if not may_issue_commands(event.actor, event.author_association, event.issue_author, self.config.privileged_user_ids):
            return EventHandlingResult(EventOutcome.DENIED)

        commands = parse_commands(event.body, self.config.trigger_prefix)
        if not commands:
            logger.debug("Comment carries no commands", repository=event.repository, issue_number=event.issue_number)
            return EventHandlingResult(EventOutcome.NOOP)

        logger.info(
            "Running comment commands",
            repository=event.repository,
            issue_number=event.issue_number,
            actor=event.actor.login,
            commands=[type(command).__name__ for command in commands],
        )
        applied: list[PlanStep] = []
        async with self._client_for(event) as client:
            # Commands run in order; each one reads state after the previous one was applied.
            for command in commands:
                plan = await self._plan_command(client, event, command)
                applied.extend(await execute_plan(client, event.issue_number, plan))
        return EventHandlingResult(EventOutcome.APPLIED if applied else EventOutcome.NOOP, applied)

    async def _plan_command(self, client: TrackerClientBase, event: IssueCommentCreatedEvent, command: Command) -> ReconciliationPlan:
        match command:
            case Claim() | Unclaim():
                return plan_assignment(command, event.actor)
            case MarkReady() | MarkNeedsAuthor() | TriageNeeded():
                return plan_simple_command(command)
            case BugToggle():
                current_labels = await client.list_labels_for_issue(event.issue_number)
                return plan_bug_toggle(current_labels)
            case LabelEdit():
                current_labels = await client.list_labels_for_issue(event.issue_number)
                vocabulary = await client.list_labels_for_repo()
                return plan_label_edit(command, current_labels, vocabulary)
            case _:
                assert_never(command)

    async def _handle_pull_request_opened(self, event: PullRequestOpenedEvent | PullRequestReopenedEvent) -> EventHandlingResult:
        async with self._client_for(event) as client:
            changed_files = await client.list_changed_files(event.pull_number)
            labels = labels_for_changed_files(changed_files, self.config.path_label_rules)
            logger.info(
                "Labelling pull request from changed files",
                repository=event.repository,
                pull_number=event.pull_number,
                changed_file_count=len(changed_files),
                labels=sorted(labels),
            )
            if not labels:
                return EventHandlingResult(EventOutcome.NOOP)
            applied = await execute_plan(client, event.pull_number, (AddLabels(labels=sorted_labels(labels)),))
        return EventHandlingResult(EventOutcome.APPLIED, applied)
