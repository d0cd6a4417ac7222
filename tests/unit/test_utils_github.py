"""Contains unit tests for the utils.github module."""

import pytest

from triage_bot.utils.github import split_repository


def test_split_repository_valid() -> None:
    """Test splitting a valid owner/repo string."""
    owner, repo = split_repository("octocat/Hello-World")
    assert owner == "octocat"
    assert repo == "Hello-World"


def test_split_repository_missing() -> None:
    """Test that ValueError is raised if repo is None."""
    with pytest.raises(ValueError, match="owner/repo"):
        split_repository(None)


@pytest.mark.parametrize(
    "malformed_repo",
    [
        pytest.param("", id="empty string"),
        pytest.param("/", id="only a slash"),
        pytest.param("octocat-HelloWorld", id="no slash"),
        pytest.param("owner/repo/extra", id="too many parts"),
    ],
)
def test_split_repository_various_malformed(malformed_repo: str) -> None:
    """Test that ValueError is raised if repo is malformed (various cases)."""
    with pytest.raises(ValueError):
        split_repository(malformed_repo)


@pytest.mark.parametrize(
    "repo_input,expected_owner,expected_repo",
    [
        pytest.param("octocat/Hello-World", "octocat", "Hello-World", id="no slashes"),
        pytest.param("/octocat/Hello-World", "octocat", "Hello-World", id="leading slash"),
        pytest.param("octocat/Hello-World/", "octocat", "Hello-World", id="trailing slash"),
    ],
)
def test_split_repository_strips_slashes(repo_input: str, expected_owner: str, expected_repo: str) -> None:
    """Test that surrounding slashes are ignored."""
    assert split_repository(repo_input) == (expected_owner, expected_repo)
