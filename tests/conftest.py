"""Shared fixtures for trietok tests."""

import pytest

import trietok as ttok

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua. Arcu odio ut sem nulla "
    "pharetra diam. Turpis tincidunt id aliquet risus feugiat in ante metus. "
    "Ipsum dolor sit amet consectetur adipiscing. Neque sodales ut etiam sit amet "
    "nisl purus in. Tincidunt nunc pulvinar sapien et ligula. Feugiat nisl "
    "pretium fusce id velit ut tortor pretium. Odio ut sem nulla pharetra diam "
    "sit amet nisl suscipit.\n\n"
    "Fusce id velit ut tortor pretium. Sagittis vitae et leo duis ut diam. "
    "Scelerisque eu ultrices vitae auctor. Nullam vehicula ipsum a arcu cursus "
    "vitae. Pretium nibh ipsum consequat nisl. Fringilla ut morbi tincidunt augue.\n"
)


@pytest.fixture(autouse=True)
def _no_progress(monkeypatch):
    """Keep progress bars out of test output."""
    monkeypatch.setenv("TRIETOK_DISABLE_PROGRESS", "1")


@pytest.fixture
def lorem() -> str:
    """Return a short multi-paragraph training text."""
    return LOREM


@pytest.fixture
def lorem_tokenizer(lorem):
    """Return a tokenizer trained on the lorem text."""
    return ttok.build_vocabulary(lorem, 80)
