# tests/conftest.py

"""Shared pytest fixtures for all baewatch tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from baewatch.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_config_path(tmp_path: Path) -> Generator[Path, None, None]:
    """Point Settings.CONFIG_PATH at an empty temp dir for every test."""
    original = Settings.CONFIG_PATH
    Settings.CONFIG_PATH = tmp_path / "config.json"
    yield Settings.CONFIG_PATH
    Settings.CONFIG_PATH = original
