"""Tracker Client adapter for the PyGithub library.

PyGithub is blocking, so every call runs in a worker thread and the event
loop keeps serving other deliveries meanwhile.
"""

import asyncio
from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from github import Github, GithubException, GithubIntegration, UnknownObjectException
from github.Issue import Issue
from github.Repository import Repository
from requests.exceptions import RequestException

from triage_bot.utils.github import split_repository

from .abc import TrackerClientBase
from .client import get_github_integration, get_installation_client
from .exceptions import TrackerCallFailure

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def raise_tracker_call_failure(func: F) -> F:
    """Decorator to translate PyGithub and transport errors into TrackerCallFailure, logging details of 422 responses."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except GithubException as exc:
            if exc.status == 422:
                error_data = exc.data if isinstance(exc.data, dict) else {}
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=error_data.get("message", "Unprocessable Entity"),
                    errors=error_data.get("errors", []),
                    status_code=422,
                )
            raise TrackerCallFailure(func.__name__, str(exc), status_code=exc.status) from exc
        except RequestException as exc:
            raise TrackerCallFailure(func.__name__, str(exc)) from exc

    return wrapper  # type: ignore


class PyGithubAdapter(TrackerClientBase):
    """Tracker Client adapter for the PyGithub library, bound to one repository."""

    def __init__(self, repository: Repository, client: Github | None = None) -> None:
        """Initialize the adapter with an already-authenticated repository handle and the client that owns it."""
        self.repository = repository
        self.client = client

    @classmethod
    async def create(cls, repo: str, integration: GithubIntegration, installation_id: int | None = None) -> Self:
        """Create an adapter for a repository, authenticated as the App's installation on it.

        Args:
            repo: Repository in 'owner/repo' format
            integration: Integration authenticated as the GitHub App
            installation_id: Installation id from the webhook delivery, if known

        Returns:
            Configured PyGithubAdapter instance
        """
        owner, repo_name = split_repository(repo)
        logger.info("Creating installation client for repository", owner=owner, repo_name=repo_name, installation_id=installation_id)
        client = await asyncio.to_thread(get_installation_client, integration, repo, installation_id)
        return cls(client.get_repo(f"{owner}/{repo_name}", lazy=True), client)

    async def close(self) -> None:
        """Close the installation client's HTTP session."""
        if self.client is not None:
            await asyncio.to_thread(self.client.close)

    async def _get_issue(self, issue_number: int) -> Issue:
        return await asyncio.to_thread(self.repository.get_issue, issue_number)

    # Labels
    @raise_tracker_call_failure
    async def add_labels(self, issue_number: int, labels: list[str]) -> None:
        """Add labels to an issue."""
        issue = await self._get_issue(issue_number)
        await asyncio.to_thread(issue.add_to_labels, *labels)

    @raise_tracker_call_failure
    async def remove_label(self, issue_number: int, label: str) -> None:
        """Remove a label from an issue, treating an absent label as already removed."""
        issue = await self._get_issue(issue_number)
        try:
            await asyncio.to_thread(issue.remove_from_labels, label)
        except UnknownObjectException:
            logger.info("Label not applied to issue, nothing to remove", issue_number=issue_number, label=label)

    @raise_tracker_call_failure
    async def replace_all_labels(self, issue_number: int, labels: list[str]) -> None:
        """Replace all labels on an issue (or pull request - GitHub considers them the same for label purposes)."""
        issue = await self._get_issue(issue_number)
        if labels:
            await asyncio.to_thread(issue.set_labels, *labels)
        else:
            await asyncio.to_thread(issue.delete_labels)

    @raise_tracker_call_failure
    async def list_labels_for_issue(self, issue_number: int) -> list[str]:
        """List the names of labels applied to an issue."""
        issue = await self._get_issue(issue_number)
        return await asyncio.to_thread(lambda: [label.name for label in issue.get_labels()])

    @raise_tracker_call_failure
    async def list_labels_for_repo(self) -> list[str]:
        """List the names of labels defined in the repository."""
        return await asyncio.to_thread(lambda: [label.name for label in self.repository.get_labels()])

    # Assignees
    @raise_tracker_call_failure
    async def add_assignees(self, issue_number: int, assignees: list[str]) -> None:
        """Assign users to an issue."""
        issue = await self._get_issue(issue_number)
        await asyncio.to_thread(issue.add_to_assignees, *assignees)

    @raise_tracker_call_failure
    async def remove_assignees(self, issue_number: int, assignees: list[str]) -> None:
        """Unassign users from an issue."""
        issue = await self._get_issue(issue_number)
        await asyncio.to_thread(issue.remove_from_assignees, *assignees)

    # Comments
    @raise_tracker_call_failure
    async def create_comment(self, issue_number: int, body: str) -> None:
        """Post a comment on an issue."""
        issue = await self._get_issue(issue_number)
        await asyncio.to_thread(issue.create_comment, body)

    # Pull requests
    @raise_tracker_call_failure
    async def list_changed_files(self, pull_number: int) -> list[str]:
        """List the paths of files changed in a pull request."""
        pull_request = await asyncio.to_thread(self.repository.get_pull, pull_number)
        return await asyncio.to_thread(lambda: [changed.filename for changed in pull_request.get_files()])


class GitHubAppClientFactory:
    """Creates installation-scoped adapters for webhook deliveries.

    The App-level integration is created once; an installation client is
    resolved for every delivery from the installation id the delivery carries.
    """

    def __init__(self, github_app_id: int, github_app_private_key: str, github_api_url: str = "https://api.github.com") -> None:
        """Initialize the factory with the GitHub App credentials."""
        self.integration = get_github_integration(github_app_id, github_app_private_key, github_api_url)

    async def __call__(self, repository: str, installation_id: int | None) -> PyGithubAdapter:
        """Return an adapter for the repository, authenticated as the installation."""
        return await PyGithubAdapter.create(repository, self.integration, installation_id)
