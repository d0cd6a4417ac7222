"""Authorization of comment commands."""

from .gate import may_issue_commands
from .privilege import PrivilegeTier, classify_author_association

__all__ = [
    "PrivilegeTier",
    "classify_author_association",
    "may_issue_commands",
]
