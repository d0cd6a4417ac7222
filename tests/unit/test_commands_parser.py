"""Unit tests for extracting commands from comment bodies."""

import pytest

from triage_bot.commands.models import BugToggle, Claim, LabelEdit, MarkNeedsAuthor, MarkReady, Unclaim
from triage_bot.commands.parser import parse_command_line, parse_commands, parse_label_tokens

PREFIX = "!bot"


@pytest.mark.parametrize(
    "line,expected",
    [
        ("!bot claim", Claim()),
        ("!bot unclaim", Unclaim()),
        ("!bot ready", MarkReady()),
        ("!bot author", MarkNeedsAuthor()),
        ("!bot bug", BugToggle()),
        ("   !bot    claim", Claim()),
        ("\t!bot\tready", MarkReady()),
        ("!botclaim", Claim()),
        ("!bot label +bug", LabelEdit(adds=frozenset({"bug"}))),
    ],
)
def test_parse_command_line(line: str, expected: object) -> None:
    """Test classification of single command lines."""
    assert parse_command_line(line, PREFIX) == expected


@pytest.mark.parametrize(
    "line",
    [
        "claim",
        "please !bot claim",
        "!bot",
        "!bot dance",
        "!bot label",
        "!bot label bug triage",
        "!bot label + -",
        "!BOT claim",
    ],
)
def test_lines_without_a_command(line: str) -> None:
    """Test that lines without a recognizable command yield nothing."""
    assert parse_command_line(line, PREFIX) is None


def test_unclaim_is_not_read_as_claim() -> None:
    """Test that the longer keyword wins when one keyword prefixes another."""
    assert parse_commands("!bot unclaim", PREFIX) == [Unclaim()]


def test_multiple_commands_in_order() -> None:
    """Test that every command line is returned in the order it appears."""
    body = "Thanks for the report!\n!bot author\nsome prose\n  !bot ready\r\n!bot claim"
    assert parse_commands(body, PREFIX) == [MarkNeedsAuthor(), MarkReady(), Claim()]


@pytest.mark.parametrize(
    "body",
    [
        "",
        "just a regular comment",
        "claim\nready\nlabel +bug",
        "I think the bot should claim this\nbut not !bot in the middle",
    ],
)
def test_bodies_without_trigger_yield_nothing(body: str) -> None:
    """Test that lines not starting with the trigger never produce commands."""
    assert parse_commands(body, PREFIX) == []


def test_empty_trigger_prefix_yields_nothing() -> None:
    """Test that an empty trigger never turns prose into commands."""
    assert parse_commands("claim", "") == []


def test_custom_trigger_prefix() -> None:
    """Test that a mention-style trigger is honoured."""
    assert parse_commands("@triage-bot bug", "@triage-bot") == [BugToggle()]
    assert parse_commands("!bot bug", "@triage-bot") == []


def test_parse_label_tokens() -> None:
    """Test that only sigil tokens count and their names are kept verbatim."""
    edit = parse_label_tokens(" +bug -triage-needed client +area:net ++double")
    assert edit.adds == frozenset({"bug", "area:net", "+double"})
    assert edit.removes == frozenset({"triage-needed"})


def test_label_in_both_sets_is_removed() -> None:
    """Test that a label requested for both addition and removal is only removed."""
    edit = parse_label_tokens("+a -a +b")
    assert edit.adds == frozenset({"b"})
    assert edit.removes == frozenset({"a"})
    assert edit.adds.isdisjoint(edit.removes)


def test_label_edit_normalizes_overlap_on_construction() -> None:
    """Test that LabelEdit itself keeps its sets disjoint."""
    edit = LabelEdit(adds=frozenset({"x", "y"}), removes=frozenset({"y"}))
    assert edit.adds == frozenset({"x"})
    assert edit.removes == frozenset({"y"})
