"""
Shared test fixtures and configuration.
"""

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from releasegen.core.models.config import ReleaseSettings


@pytest.fixture
def release_root(tmp_path: Path) -> Path:
    """A repository layout: repositories/, categories.json, no releases/ yet."""
    (tmp_path / "repositories").mkdir()
    (tmp_path / "categories.json").write_text(json.dumps(["Tools", "Games"]))
    return tmp_path


@pytest.fixture
def settings(release_root: Path) -> ReleaseSettings:
    return ReleaseSettings(
        repositories_dir=release_root / "repositories",
        releases_dir=release_root / "releases",
        categories_file=release_root / "categories.json",
    )


@pytest.fixture
def write_metadata(release_root: Path):
    """Write a metadata.json under repositories/<rel_dir>/ and return its path."""

    def _write(rel_dir: str, data: Any) -> Path:
        directory = release_root / "repositories" / rel_dir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "metadata.json"
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """The CLI reconfigures the root logger; undo that after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
