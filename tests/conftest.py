from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.repo_builder import FIXTURE_PROJECT, RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable Go project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def fixture_project() -> Path:
    """Return the checked-in Go project used by end-to-end tests."""
    return FIXTURE_PROJECT
