"""Base ABC for Tracker Clients."""

from abc import ABC, abstractmethod


class TrackerClientBase(ABC):
    """Base ABC for Tracker Clients bound to a single repository.

    Pull requests are issues for the purpose of labels, assignees and
    comments, so every issue_number may also be a pull request number.
    """

    # Labels
    @abstractmethod
    async def add_labels(self, issue_number: int, labels: list[str]) -> None:
        """Add labels to an issue."""
        pass

    @abstractmethod
    async def remove_label(self, issue_number: int, label: str) -> None:
        """Remove a label from an issue."""
        pass

    @abstractmethod
    async def replace_all_labels(self, issue_number: int, labels: list[str]) -> None:
        """Replace all labels on an issue."""
        pass

    @abstractmethod
    async def list_labels_for_issue(self, issue_number: int) -> list[str]:
        """List the names of labels applied to an issue."""
        pass

    @abstractmethod
    async def list_labels_for_repo(self) -> list[str]:
        """List the names of labels defined in the repository."""
        pass

    # Assignees
    @abstractmethod
    async def add_assignees(self, issue_number: int, assignees: list[str]) -> None:
        """Assign users to an issue."""
        pass

    @abstractmethod
    async def remove_assignees(self, issue_number: int, assignees: list[str]) -> None:
        """Unassign users from an issue."""
        pass

    # Comments
    @abstractmethod
    async def create_comment(self, issue_number: int, body: str) -> None:
        """Post a comment on an issue."""
        pass

    # Pull requests
    @abstractmethod
    async def list_changed_files(self, pull_number: int) -> list[str]:
        """List the paths of files changed in a pull request."""
        pass

    async def close(self) -> None:
        """Release connections held by the client. Called once the event that obtained it is handled."""
        pass
