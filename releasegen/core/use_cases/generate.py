"""
Generate use case — rebuild every release file from scratch.

Ties together discovery, loading, aggregation and synthesis. Nothing is
carried over between runs except the files already in the releases
directory, which are overwritten or removed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from releasegen.core.config.loader import load_category_allowlist
from releasegen.core.models.config import ReleaseSettings
from releasegen.core.models.descriptor import Descriptor
from releasegen.core.services.aggregation import (
    group_by_category,
    total_apps,
    unlisted_categories,
)
from releasegen.core.services.descriptor_loader import load_descriptor
from releasegen.core.services.discovery import find_descriptor_files
from releasegen.core.services.synthesis import SynthesisReport, write_release_files

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    files_found: int = 0
    processed: int = 0
    skipped: int = 0
    allowed_categories: list[str] = field(default_factory=list)
    unlisted_categories: list[str] = field(default_factory=list)
    category_counts: dict[str, int] = field(default_factory=dict)
    synthesis: SynthesisReport | None = None

    @property
    def nothing_to_do(self) -> bool:
        return self.files_found == 0

    @property
    def total_categories(self) -> int:
        return len(self.category_counts)

    @property
    def total_apps(self) -> int:
        return sum(self.category_counts.values())

    def to_dict(self) -> dict:
        result: dict = {
            "files_found": self.files_found,
            "processed": self.processed,
            "skipped": self.skipped,
            "categories": self.category_counts,
            "total_categories": self.total_categories,
            "total_apps": self.total_apps,
            "allowed_categories": self.allowed_categories,
            "unlisted_categories": self.unlisted_categories,
        }
        if self.synthesis:
            result["synthesis"] = self.synthesis.to_dict()
        return result


def run_generate(settings: ReleaseSettings, dry_run: bool = False) -> GenerateResult:
    """Rebuild the releases directory from the descriptors on disk.

    Args:
        settings: Resolved paths and options for this run.
        dry_run: Compute everything but write and delete nothing.

    Returns:
        GenerateResult with counts and what was written.
    """
    result = GenerateResult()

    allowed = load_category_allowlist(settings.categories_file)
    result.allowed_categories = allowed
    logger.info("Valid categories: %s", ", ".join(allowed))

    paths = find_descriptor_files(settings.repositories_dir, settings.descriptor_filename)
    result.files_found = len(paths)
    logger.info("Found %d metadata files", len(paths))

    if not paths:
        logger.info("No metadata files found. No release files will be generated.")
        return result

    valid: list[Descriptor] = []
    for path in paths:
        descriptor = load_descriptor(path)
        if descriptor is None:
            result.skipped += 1
            continue
        valid.append(descriptor)
        result.processed += 1
        logger.info("Added %s to category '%s'", descriptor.name, descriptor.category)

    logger.info("Processed: %d, Skipped: %d", result.processed, result.skipped)

    groups = group_by_category(valid)
    result.category_counts = {name: len(apps) for name, apps in groups.items()}

    result.unlisted_categories = unlisted_categories(groups, allowed)
    for name in result.unlisted_categories:
        logger.info("Category '%s' is not in %s", name, settings.categories_file.name)

    result.synthesis = write_release_files(
        groups,
        settings.releases_dir,
        settings.public_fields,
        dry_run=dry_run,
    )

    logger.debug(
        "Generated %d category files for %d apps",
        len(result.synthesis.category_files), total_apps(groups),
    )
    return result
