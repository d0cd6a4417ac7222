"""Unit tests for deriving labels from changed file paths."""

import pytest

from triage_bot.reconcile.file_paths import DEFAULT_PATH_LABEL_RULES, labels_for_changed_files


def test_client_change_only() -> None:
    """Test that unrelated files contribute nothing."""
    assert labels_for_changed_files(["src/client/render.cpp", "docs/readme.md"]) == {"client"}


def test_labels_accumulate_across_files() -> None:
    """Test that matches from different files are collected and deduplicated."""
    paths = [
        "src/engine/client/sound.cpp",
        "src/engine/server/register.cpp",
        "src/game/editor/editor.cpp",
        "src/engine/shared/network.cpp",
    ]
    assert labels_for_changed_files(paths) == {"engine", "client", "server", "editor", "network"}


def test_map_trigger_uses_maps_label() -> None:
    """Test that the trigger and the label may differ."""
    assert labels_for_changed_files(["data/maps/dm1.map"]) == {"maps"}


def test_substring_match_is_unanchored() -> None:
    """Test that matching is on the whole path, not on path segments."""
    assert labels_for_changed_files(["src/tools/mapshot.c"]) == {"maps"}
    assert labels_for_changed_files(["scripts/demo_extractor.py"]) == {"demo"}


def test_match_is_case_sensitive() -> None:
    """Test that upper-case paths do not match lower-case triggers."""
    assert labels_for_changed_files(["src/Client/Render.cpp"]) == frozenset()


@pytest.mark.parametrize("paths", [[], ["README.md"], ["CMakeLists.txt", "docs/build.md"]])
def test_no_matches(paths: list[str]) -> None:
    """Test that nothing is labelled when no trigger matches."""
    assert labels_for_changed_files(paths) == frozenset()


def test_custom_rules() -> None:
    """Test that a custom rule table replaces the default one."""
    rules = {"docs/": "documentation"}
    assert labels_for_changed_files(["docs/readme.md", "src/client/a.cpp"], rules) == {"documentation"}


def test_default_rules() -> None:
    """Test the default trigger table."""
    assert DEFAULT_PATH_LABEL_RULES["map"] == "maps"
    assert set(DEFAULT_PATH_LABEL_RULES.values()) == {"client", "server", "demo", "editor", "engine", "maps", "network"}
