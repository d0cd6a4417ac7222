"""Pydantic models for the webhook events the bot understands."""

from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict


class ActorIdentity(BaseModel):
    """A GitHub user identified by login and numeric id."""

    model_config = ConfigDict(frozen=True)

    login: str
    id: int


class RepositoryEventBase(BaseModel):
    """Fields shared by every event scoped to a repository."""

    model_config = ConfigDict(frozen=True)

    delivery_id: str | None = None
    repository: str
    installation_id: int | None = None
    actor: ActorIdentity
    author_association: str | None = None


class PingEvent(BaseModel):
    """Sent by GitHub when a webhook is first configured."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ping"] = "ping"
    delivery_id: str | None = None
    zen: str | None = None
    hook_id: int | None = None


class IssueOpenedEvent(RepositoryEventBase):
    """An issue was opened."""

    kind: Literal["issue_opened"] = "issue_opened"
    issue_number: int


class IssueCommentCreatedEvent(RepositoryEventBase):
    """A comment was posted on an issue or pull request."""

    kind: Literal["issue_comment_created"] = "issue_comment_created"
    issue_number: int
    issue_author: ActorIdentity
    body: str


class PullRequestOpenedEvent(RepositoryEventBase):
    """A pull request was opened."""

    kind: Literal["pull_request_opened"] = "pull_request_opened"
    pull_number: int


class PullRequestReopenedEvent(RepositoryEventBase):
    """A closed pull request was reopened."""

    kind: Literal["pull_request_reopened"] = "pull_request_reopened"
    pull_number: int


class PullRequestEditedEvent(RepositoryEventBase):
    """A pull request's title, body or base branch was edited."""

    kind: Literal["pull_request_edited"] = "pull_request_edited"
    pull_number: int


class OtherEvent(BaseModel):
    """Any event type or action the bot does not act on."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["other"] = "other"
    delivery_id: str | None = None
    name: str
    action: str | None = None
    repository: str | None = None


Event: TypeAlias = (
    PingEvent
    | IssueOpenedEvent
    | IssueCommentCreatedEvent
    | PullRequestOpenedEvent
    | PullRequestReopenedEvent
    | PullRequestEditedEvent
    | OtherEvent
)
