"""
Synthesis service — write release files and reconcile stale ones.

Order of operations:
    1. ensure the output directory exists
    2. one category-<slug>.json per category
    3. categories.json (if any category manifest was written)
    4. releases.json (if any app exists)
    5. delete category-*.json files not written in step 2

A failure on one output is logged and never stops the others.
Side effects are confined to the output directory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from releasegen.core.models.descriptor import Descriptor
from releasegen.core.persistence.json_file import write_json
from releasegen.core.services.manifests import (
    build_categories_index,
    build_category_manifest,
    build_releases_index,
    category_filename,
    is_category_filename,
)

logger = logging.getLogger(__name__)

CATEGORIES_INDEX_FILE = "categories.json"
RELEASES_INDEX_FILE = "releases.json"


@dataclass
class SynthesisReport:
    """What the synthesis step wrote, skipped and removed."""

    output_dir: Path
    dry_run: bool = False
    created_output_dir: bool = False
    category_files: list[str] = field(default_factory=list)
    categories_written: list[str] = field(default_factory=list)
    categories_index_written: bool = False
    releases_index_written: bool = False
    removed_files: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "output_dir": str(self.output_dir),
            "dry_run": self.dry_run,
            "ok": self.ok,
            "created_output_dir": self.created_output_dir,
            "category_files": self.category_files,
            "categories_index_written": self.categories_index_written,
            "releases_index_written": self.releases_index_written,
            "removed_files": self.removed_files,
            "failures": self.failures,
        }


def write_release_files(
    groups: dict[str, list[Descriptor]],
    output_dir: Path,
    public_fields: Iterable[str],
    dry_run: bool = False,
) -> SynthesisReport:
    """Write every release file for *groups* into *output_dir*.

    In dry-run mode nothing is created, written or deleted; the report
    lists what a real run would do.

    Raises:
        OSError: If the output directory cannot be created.
    """
    report = SynthesisReport(output_dir=output_dir, dry_run=dry_run)
    public = list(public_fields)

    if not output_dir.is_dir():
        if not dry_run:
            output_dir.mkdir(parents=True, exist_ok=True)
        report.created_output_dir = True
        logger.info("Created releases directory %s", output_dir)

    # ── Category manifests ───────────────────────────────────────
    for category, apps in groups.items():
        filename = category_filename(category)
        manifest = build_category_manifest(category, apps, public)
        if not _write(manifest.to_json_dict(), output_dir / filename, report):
            continue
        report.category_files.append(filename)
        report.categories_written.append(category)
        logger.info("Generated %s with %d apps", filename, manifest.count)

    # ── Indexes ──────────────────────────────────────────────────
    if report.categories_written:
        index = build_categories_index(report.categories_written, groups)
        if _write(index.to_json_dict(), output_dir / CATEGORIES_INDEX_FILE, report):
            report.categories_index_written = True
            logger.info(
                "Generated %s with %d categories",
                CATEGORIES_INDEX_FILE, index.total_categories,
            )

    if groups:
        releases = build_releases_index(groups)
        if _write(releases.to_json_dict(), output_dir / RELEASES_INDEX_FILE, report):
            report.releases_index_written = True
            logger.info("Generated %s with %d apps", RELEASES_INDEX_FILE, releases.count)

    # ── Reconciliation ───────────────────────────────────────────
    report.removed_files = remove_obsolete_manifests(
        output_dir, keep=report.category_files, report=report,
    )

    return report


def _write(data: dict, path: Path, report: SynthesisReport) -> bool:
    if report.dry_run:
        return True
    try:
        write_json(data, path)
    except OSError as e:
        logger.error("Failed to write %s: %s", path.name, e)
        report.failures.append(f"write {path.name}: {e}")
        return False
    return True


def find_category_manifests(output_dir: Path) -> list[str]:
    """Names of existing category-*.json files in *output_dir*."""
    if not output_dir.is_dir():
        return []
    return sorted(
        p.name for p in output_dir.iterdir()
        if p.is_file() and is_category_filename(p.name)
    )


def remove_obsolete_manifests(
    output_dir: Path,
    keep: Iterable[str],
    report: SynthesisReport | None = None,
) -> list[str]:
    """Delete category manifests in *output_dir* whose name is not in *keep*.

    Returns the names removed (or, in dry-run, that would be removed).
    """
    keep_set = set(keep)
    dry_run = report.dry_run if report else False
    removed: list[str] = []

    for name in find_category_manifests(output_dir):
        if name in keep_set:
            continue
        if not dry_run:
            try:
                (output_dir / name).unlink()
            except OSError as e:
                logger.warning("Could not remove %s: %s", name, e)
                if report is not None:
                    report.failures.append(f"remove {name}: {e}")
                continue
        removed.append(name)
        logger.info("Removed obsolete file: %s", name)

    return removed
