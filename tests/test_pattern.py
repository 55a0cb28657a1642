"""Tests for text splitting presets, parallel mode lookup and progress switches."""

import pytest

import trietok as ttok
from trietok._progress import _is_enabled
from trietok.errors import ParallelModeError, PatternError
from trietok.parallel import ParallelMode, group_items, resolve_workers


# Split patterns
# ---------------------------------------------------------------------------


def test_split_lines_keeps_newlines():
    """Each line chunk keeps its trailing newline."""
    assert ttok.split_text("one\ntwo\nthree", "lines") == ["one\n", "two\n", "three"]


def test_split_gpt2_words():
    """The GPT-2 preset attaches leading spaces to words."""
    assert ttok.split_text("hello world", "gpt2") == ["hello", " world"]


def test_split_chunks_cover_text(lorem):
    """Presets lose no text."""
    for name in ("lines", "paragraphs", "gpt2"):
        assert "".join(ttok.split_text(lorem, name)) == lorem


def test_split_raw_regex():
    """Strings that are not preset names are used as regexes."""
    assert ttok.split_text("a1b22c", r"\d+") == ["1", "22"]


def test_split_invalid_regex():
    """Invalid regexes raise PatternError with the pattern attached."""
    with pytest.raises(PatternError) as excinfo:
        ttok.split_text("abc", "[")
    assert excinfo.value.pattern == "["


def test_get_pattern_case_insensitive():
    """Preset lookup ignores case and dashes."""
    assert ttok.get_pattern("GPT2") == ttok.TokenPattern.GPT2.value
    assert ttok.list_patterns() == ["gpt2", "lines", "paragraphs"]
    with pytest.raises(PatternError):
        ttok.get_pattern("gpt-9")


# Parallel helpers
# ---------------------------------------------------------------------------


def test_parallel_mode_lookup():
    """Modes resolve by name or pass through."""
    assert ParallelMode.get("Batch") is ParallelMode.BATCH
    assert ParallelMode.get(ParallelMode.OFF) is ParallelMode.OFF
    assert ttok.list_parallel_modes() == ["auto", "batch", "off"]
    with pytest.raises(ParallelModeError):
        ParallelMode.get("chunk")


def test_resolve_workers():
    """Zero and negative counts mean one worker."""
    assert resolve_workers(0) == 1
    assert resolve_workers(-3) == 1
    assert resolve_workers(5) == 5
    assert resolve_workers(None) >= 1


def test_group_items_preserves_order():
    """Groups are contiguous and at most twice the worker count."""
    items = list(range(10))
    groups = group_items(items, 2)
    assert len(groups) <= 4
    assert [x for group in groups for x in group] == items
    assert group_items([], 4) == []


# Progress switch
# ---------------------------------------------------------------------------


def test_progress_env_override(monkeypatch):
    """The environment variable disables progress bars globally."""
    monkeypatch.setenv("TRIETOK_DISABLE_PROGRESS", "1")
    assert not _is_enabled()


def test_progress_toggle(monkeypatch):
    """The module switch turns progress bars on and off."""
    monkeypatch.delenv("TRIETOK_DISABLE_PROGRESS", raising=False)
    ttok.disable_progress()
    try:
        assert not _is_enabled()
    finally:
        ttok.enable_progress()
    assert _is_enabled()
