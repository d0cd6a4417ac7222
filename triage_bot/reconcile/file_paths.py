"""Derives topic labels from the files a pull request changes."""

from collections.abc import Iterable, Mapping

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

# Substring of the changed path -> label applied to the pull request.
DEFAULT_PATH_LABEL_RULES: Mapping[str, str] = {
    "client": "client",
    "server": "server",
    "demo": "demo",
    "editor": "editor",
    "engine": "engine",
    "map": "maps",
    "network": "network",
}


def labels_for_changed_files(paths: Iterable[str], rules: Mapping[str, str] = DEFAULT_PATH_LABEL_RULES) -> frozenset[str]:
    """Return the labels whose trigger occurs anywhere in any changed path.

    Matching is a case-sensitive substring test on the whole path, not a
    path-segment match, so `src/mapshot.c` matches the `map` trigger.
    """
    labels: set[str] = set()
    for path in paths:
        for trigger, label in rules.items():
            if trigger in path:
                labels.add(label)
    logger.debug("Derived labels from changed files", labels=sorted(labels))
    return frozenset(labels)
