"""Utility modules for shared functionality."""

from .github import split_repository
from .logging import configure_logging

__all__ = [
    "configure_logging",
    "split_repository",
]
