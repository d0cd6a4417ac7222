"""Commands the bot understands."""

from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass(frozen=True)
class Claim:
    """Assign the commenter to the issue."""


@dataclass(frozen=True)
class Unclaim:
    """Remove the commenter from the issue's assignees."""


@dataclass(frozen=True)
class MarkReady:
    """Mark the issue or pull request as ready for review."""


@dataclass(frozen=True)
class MarkNeedsAuthor:
    """Mark the issue or pull request as waiting on its author."""


@dataclass(frozen=True)
class BugToggle:
    """Toggle the bug label."""


@dataclass(frozen=True)
class LabelEdit:
    """Add and remove arbitrary labels from the repository's vocabulary.

    A name requested for both addition and removal is removed.
    """

    adds: frozenset[str] = field(default_factory=frozenset)
    removes: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "removes", frozenset(self.removes))
        object.__setattr__(self, "adds", frozenset(self.adds) - self.removes)

    @property
    def is_empty(self) -> bool:
        """Whether the edit names no labels at all."""
        return not self.adds and not self.removes


@dataclass(frozen=True)
class TriageNeeded:
    """Flag a newly opened issue for triage."""


Command: TypeAlias = Claim | Unclaim | MarkReady | MarkNeedsAuthor | BugToggle | LabelEdit | TriageNeeded
