"""Extracts bot commands from comment bodies.

Every line that starts with the trigger prefix (ignoring leading whitespace)
is a candidate command line. The text after the prefix is matched against the
command keywords, longest keyword first, so `unclaim` is never read as
`claim`. Lines that match nothing are ignored. A body may carry several
command lines; they are returned in the order they appear.
"""

from collections.abc import Callable

import structlog

from triage_bot.commands.models import BugToggle, Claim, Command, LabelEdit, MarkNeedsAuthor, MarkReady, Unclaim

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

ADD_SIGIL = "+"
REMOVE_SIGIL = "-"


def parse_label_tokens(text: str) -> LabelEdit:
    """Parse `+name -name ...` tokens into a label edit.

    Tokens without a leading sigil, or with nothing after it, are ignored.
    """
    adds: set[str] = set()
    removes: set[str] = set()
    for token in text.split():
        name = token[1:]
        if not name:
            continue
        if token.startswith(ADD_SIGIL):
            adds.add(name)
        elif token.startswith(REMOVE_SIGIL):
            removes.add(name)
    return LabelEdit(adds=frozenset(adds), removes=frozenset(removes))


def _label_command(arguments: str) -> Command | None:
    edit = parse_label_tokens(arguments)
    if edit.is_empty:
        return None
    return edit


COMMAND_KEYWORDS: dict[str, Callable[[str], Command | None]] = {
    "claim": lambda _: Claim(),
    "unclaim": lambda _: Unclaim(),
    "ready": lambda _: MarkReady(),
    "author": lambda _: MarkNeedsAuthor(),
    "bug": lambda _: BugToggle(),
    "label": _label_command,
}

# Longest keyword first so that a keyword which prefixes another never shadows it.
_KEYWORDS_BY_LENGTH = sorted(COMMAND_KEYWORDS, key=len, reverse=True)


def parse_command_line(line: str, trigger_prefix: str) -> Command | None:
    """Parse a single line, returning None when it carries no command."""
    stripped = line.lstrip()
    if not trigger_prefix or not stripped.startswith(trigger_prefix):
        return None
    remainder = stripped[len(trigger_prefix) :].lstrip()
    for keyword in _KEYWORDS_BY_LENGTH:
        if remainder.startswith(keyword):
            return COMMAND_KEYWORDS[keyword](remainder[len(keyword) :])
    logger.debug("Ignoring unrecognized command line", line=stripped)
    return None


def parse_commands(body: str, trigger_prefix: str) -> list[Command]:
    """Return the commands in a comment body, in the order they appear."""
    commands: list[Command] = []
    for line in body.splitlines():
        command = parse_command_line(line, trigger_prefix)
        if command is not None:
            commands.append(command)
    return commands
