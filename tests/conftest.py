"""Pytest configuration and shared fixtures for container tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import PackagingConfig


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    """Empty parent directory for staging areas, checked for leftovers by tests."""
    root = tmp_path / "staging"
    root.mkdir()
    return root


@pytest.fixture
def staging_config(staging_root: Path) -> PackagingConfig:
    """Sequential packaging config that stages under ``staging_root``."""
    return PackagingConfig(staging_root=staging_root)
