"""Pydantic schemas for the subset of the GitHub webhook payloads the bot reads.

Unknown fields are ignored so that payload additions on GitHub's side never
break decoding.
"""

from pydantic import BaseModel, ConfigDict


class PayloadModel(BaseModel):
    """Base for payload schemas that tolerate unknown fields."""

    model_config = ConfigDict(extra="ignore")


class UserPayload(PayloadModel):
    """A GitHub user as embedded in webhook payloads."""

    login: str
    id: int


class RepositoryPayload(PayloadModel):
    """A repository as embedded in webhook payloads."""

    full_name: str


class InstallationPayload(PayloadModel):
    """The installation reference attached to GitHub App deliveries."""

    id: int


class IssuePayload(PayloadModel):
    """An issue as embedded in issue and issue comment payloads."""

    number: int
    user: UserPayload
    author_association: str | None = None


class CommentPayload(PayloadModel):
    """An issue comment."""

    body: str | None = None
    user: UserPayload
    author_association: str | None = None


class PullRequestPayload(PayloadModel):
    """A pull request as embedded in pull request payloads."""

    number: int
    user: UserPayload
    author_association: str | None = None


class PingPayload(PayloadModel):
    """Body of a ping delivery."""

    zen: str | None = None
    hook_id: int | None = None


class IssuesPayload(PayloadModel):
    """Body of an issues delivery."""

    action: str
    issue: IssuePayload
    repository: RepositoryPayload
    sender: UserPayload
    installation: InstallationPayload | None = None


class IssueCommentPayload(PayloadModel):
    """Body of an issue_comment delivery."""

    action: str
    issue: IssuePayload
    comment: CommentPayload
    repository: RepositoryPayload
    sender: UserPayload
    installation: InstallationPayload | None = None


class PullRequestEventPayload(PayloadModel):
    """Body of a pull_request delivery."""

    action: str
    number: int | None = None
    pull_request: PullRequestPayload
    repository: RepositoryPayload
    sender: UserPayload
    installation: InstallationPayload | None = None
