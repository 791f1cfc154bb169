"""Shared fixtures for the layout tests."""

from pathlib import Path

import pytest

from tests.helpers import MUSICXML


@pytest.fixture
def score_file(tmp_path: Path) -> Path:
    path = tmp_path / "little_tune.musicxml"
    path.write_text(MUSICXML, encoding="utf-8")
    return path
