"""Shared test fixtures for ctxforge."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal initialized project layout for testing."""
    snapshots = tmp_path / "docs" / "context" / "state-snapshots"
    snapshots.mkdir(parents=True)
    return tmp_path
