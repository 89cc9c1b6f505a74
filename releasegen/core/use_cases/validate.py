"""
Validate use case — check descriptors without writing anything.

Meant for CI on pull requests that add or change a metadata.json.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from releasegen.core.config.loader import load_category_allowlist
from releasegen.core.models.config import ReleaseSettings
from releasegen.core.services.aggregation import group_by_category, unlisted_categories
from releasegen.core.services.descriptor_loader import LoadOutcome, inspect_descriptor
from releasegen.core.services.discovery import find_descriptor_files


@dataclass
class ValidateResult:
    """Result of descriptor validation."""

    outcomes: list[LoadOutcome] = field(default_factory=list)
    allowed_categories: list[str] = field(default_factory=list)
    unlisted_categories: list[str] = field(default_factory=list)

    @property
    def invalid(self) -> list[LoadOutcome]:
        return [o for o in self.outcomes if not o.valid]

    @property
    def valid_count(self) -> int:
        return sum(1 for o in self.outcomes if o.valid)

    @property
    def valid(self) -> bool:
        return not self.invalid

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "total": len(self.outcomes),
            "valid_count": self.valid_count,
            "invalid": [o.to_dict() for o in self.invalid],
            "unlisted_categories": self.unlisted_categories,
        }


def run_validate(settings: ReleaseSettings) -> ValidateResult:
    """Load every descriptor under the repositories directory and report problems.

    Categories missing from the allow-list are reported but do not make
    the result invalid.
    """
    result = ValidateResult()
    result.allowed_categories = load_category_allowlist(settings.categories_file)

    paths = find_descriptor_files(settings.repositories_dir, settings.descriptor_filename)
    result.outcomes = [inspect_descriptor(p) for p in paths]

    groups = group_by_category(o.descriptor for o in result.outcomes if o.descriptor)
    result.unlisted_categories = unlisted_categories(groups, result.allowed_categories)
    return result
