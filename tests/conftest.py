from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project root with an empty ``dotenv`` directory inside."""

    (tmp_path / "dotenv").mkdir()
    return tmp_path


@pytest.fixture
def dotenv_dir(project_root: Path) -> Path:
    return project_root / "dotenv"
