"""
Manifest builders — turn grouped descriptors into release documents.

Pure logic: no filesystem access. The synthesis service decides what
gets written where.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from releasegen.core.models.descriptor import INTERNAL_FIELDS, Descriptor
from releasegen.core.models.manifest import (
    CategoriesIndex,
    CategoryEntry,
    CategoryManifest,
    ReleaseEntry,
    ReleasesIndex,
)

CATEGORY_FILE_PREFIX = "category-"
CATEGORY_FILE_SUFFIX = ".json"

_UNSAFE_CHARS = re.compile(r"[^a-z0-9]")
_SLASH_RUNS = re.compile(r"/+")


def category_slug(category: str) -> str:
    """Lowercase, then replace each character outside [a-z0-9] with '-'.

    >>> category_slug("Dev Tools!")
    'dev-tools-'
    """
    return _UNSAFE_CHARS.sub("-", category.lower())


def category_filename(category: str) -> str:
    return f"{CATEGORY_FILE_PREFIX}{category_slug(category)}{CATEGORY_FILE_SUFFIX}"


def is_category_filename(filename: str) -> bool:
    """Whether *filename* looks like a generated category manifest."""
    return filename.startswith(CATEGORY_FILE_PREFIX) and filename.endswith(CATEGORY_FILE_SUFFIX)


def app_slug(descriptor: Descriptor) -> str:
    """``owner/repo/name`` — the slug used in category manifests."""
    return f"{descriptor.owner}/{descriptor.repo}/{descriptor.name}"


def release_slug(descriptor: Descriptor) -> str:
    """``owner/repo`` + path + name with repeated slashes collapsed."""
    raw = f"{descriptor.owner}/{descriptor.repo}{descriptor.path}{descriptor.name}"
    return _SLASH_RUNS.sub("/", raw)


def sort_by_name(descriptors: Iterable[Descriptor]) -> list[Descriptor]:
    return sorted(descriptors, key=lambda d: d.name)


def build_clean_app(descriptor: Descriptor, public_fields: Iterable[str]) -> dict:
    """Public projection of a descriptor for a category manifest.

    Only fields named in *public_fields* are copied, in
    ``Descriptor.to_dict()`` order: declared fields first, then
    pass-through fields as they appear in the file. Internal fields are
    dropped even when listed. A ``slug`` is appended last.
    """
    allowed = set(public_fields) - INTERNAL_FIELDS
    clean = {
        key: value
        for key, value in descriptor.to_dict().items()
        if key in allowed and key != "slug"
    }
    clean["slug"] = app_slug(descriptor)
    return clean


def build_category_manifest(
    category: str,
    descriptors: Iterable[Descriptor],
    public_fields: Iterable[str],
) -> CategoryManifest:
    public = list(public_fields)
    apps = [build_clean_app(d, public) for d in sort_by_name(descriptors)]
    return CategoryManifest(category=category, count=len(apps), apps=apps)


def build_categories_index(
    written: Iterable[str],
    groups: dict[str, list[Descriptor]],
) -> CategoriesIndex:
    """Index of the categories in *written*, sorted by name.

    ``totalApps`` counts every grouped app, including those of a
    category whose manifest failed to write.
    """
    entries = sorted(
        (
            CategoryEntry(name=name, slug=category_slug(name), count=len(groups[name]))
            for name in written
        ),
        key=lambda e: e.name,
    )
    return CategoriesIndex(
        total_categories=len(entries),
        total_apps=sum(len(apps) for apps in groups.values()),
        categories=entries,
    )


def build_releases_index(groups: dict[str, list[Descriptor]]) -> ReleasesIndex:
    """Flat name/version/slug list across every category, sorted by name."""
    entries = [
        ReleaseEntry(name=d.name, version=d.version, slug=release_slug(d))
        for apps in groups.values()
        for d in apps
    ]
    entries.sort(key=lambda e: e.name)
    return ReleasesIndex(count=len(entries), apps=entries)
