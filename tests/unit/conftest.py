"""Fixtures for unit tests."""

from typing import Any, Callable, Generator

import pytest
import structlog

from triage_bot.configuration.models import BotConfig
from triage_bot.events.models import ActorIdentity, IssueCommentCreatedEvent
from triage_bot.github.abc import TrackerClientBase
from triage_bot.github.exceptions import TrackerCallFailure
from triage_bot.routing.router import EventRouter


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class FakeTrackerClient(TrackerClientBase):
    """In-memory Tracker Client that records every call it receives."""

    def __init__(
        self,
        issue_labels: dict[int, set[str]] | None = None,
        repo_labels: set[str] | None = None,
        changed_files: dict[int, list[str]] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.issue_labels = issue_labels or {}
        self.repo_labels = repo_labels or set()
        self.changed_files = changed_files or {}
        self.fail_on = fail_on or set()
        self.assignees: dict[int, set[str]] = {}
        self.comments: dict[int, list[str]] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.reads: list[tuple[Any, ...]] = []
        self.close_count = 0

    def _record(self, *call: Any) -> None:
        if call[0] in self.fail_on:
            raise TrackerCallFailure(call[0], "simulated failure", status_code=500)
        self.calls.append(call)

    def _read(self, *call: Any) -> None:
        if call[0] in self.fail_on:
            raise TrackerCallFailure(call[0], "simulated failure", status_code=500)
        self.reads.append(call)

    async def add_labels(self, issue_number: int, labels: list[str]) -> None:
        self._record("add_labels", issue_number, list(labels))
        self.issue_labels.setdefault(issue_number, set()).update(labels)

    async def remove_label(self, issue_number: int, label: str) -> None:
        self._record("remove_label", issue_number, label)
        self.issue_labels.setdefault(issue_number, set()).discard(label)

    async def replace_all_labels(self, issue_number: int, labels: list[str]) -> None:
        self._record("replace_all_labels", issue_number, list(labels))
        self.issue_labels[issue_number] = set(labels)

    async def list_labels_for_issue(self, issue_number: int) -> list[str]:
        self._read("list_labels_for_issue", issue_number)
        return sorted(self.issue_labels.get(issue_number, set()))

    async def list_labels_for_repo(self) -> list[str]:
        self._read("list_labels_for_repo")
        return sorted(self.repo_labels)

    async def add_assignees(self, issue_number: int, assignees: list[str]) -> None:
        self._record("add_assignees", issue_number, list(assignees))
        self.assignees.setdefault(issue_number, set()).update(assignees)

    async def remove_assignees(self, issue_number: int, assignees: list[str]) -> None:
        self._record("remove_assignees", issue_number, list(assignees))
        self.assignees.setdefault(issue_number, set()).difference_update(assignees)

    async def create_comment(self, issue_number: int, body: str) -> None:
        self._record("create_comment", issue_number, body)
        self.comments.setdefault(issue_number, []).append(body)

    async def list_changed_files(self, pull_number: int) -> list[str]:
        self._read("list_changed_files", pull_number)
        return list(self.changed_files.get(pull_number, []))

    async def close(self) -> None:
        self.close_count += 1


@pytest.fixture
def make_tracker_client() -> Callable[..., FakeTrackerClient]:
    """Return a builder for fake Tracker Clients."""
    return FakeTrackerClient


@pytest.fixture
def bot_config() -> BotConfig:
    """A configuration suitable for tests; no real credentials."""
    return BotConfig(
        github_app_id=12345,
        github_app_private_key="not-a-real-key",
        webhook_secret="test-secret",
        trigger_prefix="!bot",
        privileged_user_ids=frozenset({999}),
    )


@pytest.fixture
def make_router(bot_config: BotConfig) -> Callable[[TrackerClientBase], EventRouter]:
    """Return a builder for routers that always hand out the given client."""

    def _make_router(client: TrackerClientBase) -> EventRouter:
        async def client_factory(repository: str, installation_id: int | None) -> TrackerClientBase:
            return client

        return EventRouter(bot_config, client_factory)

    return _make_router


ALICE = ActorIdentity(login="alice", id=1)
BOB = ActorIdentity(login="bob", id=2)


@pytest.fixture
def make_comment_event() -> Callable[..., IssueCommentCreatedEvent]:
    """Return a builder for comment events on issue #42 opened by bob."""

    def _make_comment_event(
        body: str,
        actor: ActorIdentity = ALICE,
        author_association: str | None = "COLLABORATOR",
        issue_author: ActorIdentity = BOB,
        issue_number: int = 42,
    ) -> IssueCommentCreatedEvent:
        return IssueCommentCreatedEvent(
            delivery_id="delivery-1",
            repository="octo/widgets",
            installation_id=7,
            actor=actor,
            author_association=author_association,
            issue_number=issue_number,
            issue_author=issue_author,
            body=body,
        )

    return _make_comment_event
