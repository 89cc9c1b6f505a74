"""
Tests for descriptor discovery — recursive metadata.json search.
"""

import os
from pathlib import Path

import pytest

from releasegen.core.services.discovery import find_descriptor_files


class TestFindDescriptorFiles:
    """Tests for find_descriptor_files()."""

    def test_missing_root_returns_empty(self, tmp_path: Path):
        assert find_descriptor_files(tmp_path / "nope") == []

    def test_empty_root(self, tmp_path: Path):
        assert find_descriptor_files(tmp_path) == []

    def test_finds_at_any_depth(self, tmp_path: Path):
        (tmp_path / "metadata.json").write_text("{}")
        deep = tmp_path / "owner" / "repo" / "apps" / "gizmo"
        deep.mkdir(parents=True)
        (deep / "metadata.json").write_text("{}")

        found = find_descriptor_files(tmp_path)
        assert set(found) == {tmp_path / "metadata.json", deep / "metadata.json"}

    def test_ignores_other_files(self, tmp_path: Path):
        (tmp_path / "README.md").write_text("hi")
        (tmp_path / "metadata.yml").write_text("name: x")
        (tmp_path / "old-metadata.json").write_text("{}")
        assert find_descriptor_files(tmp_path) == []

    def test_directory_named_like_descriptor_is_traversed(self, tmp_path: Path):
        odd = tmp_path / "metadata.json"
        odd.mkdir()
        (odd / "metadata.json").write_text("{}")

        assert find_descriptor_files(tmp_path) == [odd / "metadata.json"]

    def test_custom_filename(self, tmp_path: Path):
        (tmp_path / "app.json").write_text("{}")
        (tmp_path / "metadata.json").write_text("{}")
        assert find_descriptor_files(tmp_path, "app.json") == [tmp_path / "app.json"]

    def test_order_is_stable(self, tmp_path: Path):
        for name in ("zeta", "alpha", "mid"):
            d = tmp_path / name
            d.mkdir()
            (d / "metadata.json").write_text("{}")

        first = find_descriptor_files(tmp_path)
        assert first == find_descriptor_files(tmp_path)
        assert [p.parent.name for p in first] == ["alpha", "mid", "zeta"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlink_cycle_terminates(self, tmp_path: Path):
        app = tmp_path / "app"
        app.mkdir()
        (app / "metadata.json").write_text("{}")
        try:
            (app / "loop").symlink_to(tmp_path, target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")

        assert find_descriptor_files(tmp_path) == [app / "metadata.json"]
