"""
Release file models — the JSON documents written to releases/.

Serialized with ``to_json_dict()``, which applies the camelCase aliases
the downstream catalog expects.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CategoryManifest(BaseModel):
    """category-<slug>.json — every app in one category."""

    category: str
    count: int
    apps: list[dict[str, Any]] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json")


class CategoryEntry(BaseModel):
    """One row of categories.json."""

    name: str
    slug: str
    count: int


class CategoriesIndex(BaseModel):
    """categories.json — categories that produced a manifest."""

    model_config = ConfigDict(populate_by_name=True)

    total_categories: int = Field(alias="totalCategories")
    total_apps: int = Field(alias="totalApps")
    categories: list[CategoryEntry] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ReleaseEntry(BaseModel):
    """One row of releases.json."""

    name: str
    version: Any
    slug: str


class ReleasesIndex(BaseModel):
    """releases.json — every app across all categories."""

    count: int
    apps: list[ReleaseEntry] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json")
