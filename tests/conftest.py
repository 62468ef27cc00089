"""Pytest configuration and fixtures."""

import os

import pytest

# Ignore any local .env overrides and keep CLI prompts off - must happen before settings are read
os.environ["KELASU_CONFIRM_MOVES"] = "false"

from kelasu.game.board import Board  # noqa: E402
from kelasu.settings import get_settings  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def empty_board() -> Board:
    """Create an empty board."""
    return Board.create_empty()


@pytest.fixture
def standard_board() -> Board:
    """Create the standard starting board."""
    return Board.create_standard()


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Make sure each test sees fresh settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
