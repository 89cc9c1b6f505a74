"""
Release configuration — loaded from an optional release.yml.

Every field has a default, so a repository without a release.yml still
works: descriptors under ``repositories/``, output in ``releases/`` and
the category allow-list in ``categories.json``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# Fields a descriptor may expose in a category manifest.
DEFAULT_PUBLIC_FIELDS = [
    "name",
    "description",
    "version",
    "author",
    "icon",
    "license",
    "homepage",
    "tags",
    "screenshots",
]


class ReleaseConfig(BaseModel):
    """Declared layout of a release repository (release.yml)."""

    version: int = 1

    repositories_dir: str = "repositories"
    releases_dir: str = "releases"
    categories_file: str = "categories.json"
    descriptor_filename: str = "metadata.json"

    public_fields: list[str] = Field(default_factory=lambda: list(DEFAULT_PUBLIC_FIELDS))


class ReleaseSettings(BaseModel):
    """Resolved, absolute paths for one run of the pipeline.

    Built from a ReleaseConfig plus the directory relative paths are
    anchored to, with CLI overrides already applied.
    """

    repositories_dir: Path
    releases_dir: Path
    categories_file: Path
    descriptor_filename: str = "metadata.json"
    public_fields: list[str] = Field(default_factory=lambda: list(DEFAULT_PUBLIC_FIELDS))

    @classmethod
    def from_config(cls, config: ReleaseConfig, base_dir: Path) -> ReleaseSettings:
        """Anchor the relative paths in *config* to *base_dir*."""
        return cls(
            repositories_dir=base_dir / config.repositories_dir,
            releases_dir=base_dir / config.releases_dir,
            categories_file=base_dir / config.categories_file,
            descriptor_filename=config.descriptor_filename,
            public_fields=list(config.public_fields),
        )

    def with_overrides(
        self,
        repositories_dir: Path | None = None,
        releases_dir: Path | None = None,
        categories_file: Path | None = None,
    ) -> ReleaseSettings:
        """Return a copy with any non-None path replaced."""
        updates: dict[str, Path] = {}
        if repositories_dir is not None:
            updates["repositories_dir"] = repositories_dir
        if releases_dir is not None:
            updates["releases_dir"] = releases_dir
        if categories_file is not None:
            updates["categories_file"] = categories_file
        return self.model_copy(update=updates)
