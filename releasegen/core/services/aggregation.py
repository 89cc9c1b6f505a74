"""
Aggregation service — group valid descriptors by category.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from releasegen.core.models.descriptor import Descriptor

logger = logging.getLogger(__name__)


def group_by_category(descriptors: Iterable[Descriptor]) -> dict[str, list[Descriptor]]:
    """Partition descriptors by their verbatim ``category`` value.

    Categories keep the order in which they were first seen; apps keep
    input order (sorting happens when manifests are built).
    """
    groups: dict[str, list[Descriptor]] = {}
    for descriptor in descriptors:
        groups.setdefault(descriptor.category, []).append(descriptor)
    return groups


def unlisted_categories(groups: dict[str, list[Descriptor]], allowed: list[str]) -> list[str]:
    """Categories in *groups* that the allow-list does not name.

    Advisory only: nothing is filtered on this basis.
    """
    known = set(allowed)
    return [name for name in groups if name not in known]


def total_apps(groups: dict[str, list[Descriptor]]) -> int:
    return sum(len(apps) for apps in groups.values())
