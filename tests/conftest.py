from __future__ import annotations

import shutil
from pathlib import Path

import pytest

REPO_CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    # Work on a copy so log files and scenario edits stay inside tmp_path.
    shutil.copytree(REPO_CONFIG_DIR, tmp_path / "config")
    return tmp_path / "config" / "default.yaml"
