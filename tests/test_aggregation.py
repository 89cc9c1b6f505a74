"""
Tests for category grouping and the advisory allow-list.
"""

import json
import logging
from pathlib import Path

from releasegen.core.config.loader import load_category_allowlist
from releasegen.core.models.descriptor import Descriptor
from releasegen.core.services.aggregation import (
    group_by_category,
    total_apps,
    unlisted_categories,
)

from tests.factories import make_metadata


def _descriptor(**overrides) -> Descriptor:
    return Descriptor.model_validate(make_metadata(**overrides))


class TestGroupByCategory:
    def test_empty(self):
        assert group_by_category([]) == {}

    def test_groups_by_verbatim_category(self):
        apps = [
            _descriptor(name="A", category="Tools"),
            _descriptor(name="B", category="tools"),
            _descriptor(name="C", category="Tools"),
        ]
        groups = group_by_category(apps)

        assert list(groups) == ["Tools", "tools"]
        assert [d.name for d in groups["Tools"]] == ["A", "C"]
        assert [d.name for d in groups["tools"]] == ["B"]

    def test_first_seen_order(self):
        apps = [
            _descriptor(name="A", category="Games"),
            _descriptor(name="B", category="Audio"),
            _descriptor(name="C", category="Games"),
        ]
        assert list(group_by_category(apps)) == ["Games", "Audio"]

    def test_total_apps(self):
        apps = [_descriptor(name=n, category=c) for n, c in [("A", "x"), ("B", "y"), ("C", "x")]]
        assert total_apps(group_by_category(apps)) == 3


class TestUnlistedCategories:
    def test_reports_without_filtering(self):
        groups = group_by_category([
            _descriptor(name="A", category="Tools"),
            _descriptor(name="B", category="Secret"),
        ])

        assert unlisted_categories(groups, ["Tools"]) == ["Secret"]
        assert set(groups) == {"Tools", "Secret"}

    def test_empty_allowlist_lists_everything(self):
        groups = group_by_category([_descriptor(category="Tools")])
        assert unlisted_categories(groups, []) == ["Tools"]


class TestLoadCategoryAllowlist:
    def test_loads_array(self, tmp_path: Path):
        path = tmp_path / "categories.json"
        path.write_text(json.dumps(["Tools", "Games"]))
        assert load_category_allowlist(path) == ["Tools", "Games"]

    def test_missing_file_is_empty_with_warning(self, tmp_path: Path, caplog):
        with caplog.at_level(logging.WARNING):
            assert load_category_allowlist(tmp_path / "categories.json") == []
        assert any("categories.json" in r.getMessage() for r in caplog.records)

    def test_malformed_file_is_empty(self, tmp_path: Path, caplog):
        path = tmp_path / "categories.json"
        path.write_text("[oops")
        with caplog.at_level(logging.WARNING):
            assert load_category_allowlist(path) == []

    def test_non_array_is_empty(self, tmp_path: Path, caplog):
        path = tmp_path / "categories.json"
        path.write_text(json.dumps({"Tools": True}))
        with caplog.at_level(logging.WARNING):
            assert load_category_allowlist(path) == []
        assert any("JSON array" in r.getMessage() for r in caplog.records)
