"""
Domain models — Pydantic types for the release generator.

All models are re-exported here for convenient access:

    from releasegen.core.models import Descriptor, CategoryManifest, ReleaseConfig
"""

from releasegen.core.models.config import (
    DEFAULT_PUBLIC_FIELDS,
    ReleaseConfig,
    ReleaseSettings,
)
from releasegen.core.models.descriptor import (
    INTERNAL_FIELDS,
    REQUIRED_FIELDS,
    Descriptor,
)
from releasegen.core.models.manifest import (
    CategoriesIndex,
    CategoryEntry,
    CategoryManifest,
    ReleaseEntry,
    ReleasesIndex,
)

__all__ = [
    # manifest.py
    "CategoriesIndex",
    "CategoryEntry",
    "CategoryManifest",
    # config.py
    "DEFAULT_PUBLIC_FIELDS",
    # descriptor.py
    "Descriptor",
    "INTERNAL_FIELDS",
    "REQUIRED_FIELDS",
    "ReleaseConfig",
    "ReleaseEntry",
    "ReleaseSettings",
    "ReleasesIndex",
]
