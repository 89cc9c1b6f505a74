"""
Descriptor model — one metadata.json describing a single app.

Descriptors are written by repository authors; this tool only reads them.
Unknown keys are kept (``extra="allow"``) so optional fields such as
``files`` or ``author`` survive loading.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# Checked in this order; the first missing or empty one is reported.
REQUIRED_FIELDS = (
    "name",
    "category",
    "description",
    "version",
    "commit",
    "owner",
    "repo",
    "path",
)

# Never copied into a category manifest.
INTERNAL_FIELDS = frozenset(
    {"commit", "owner", "repo", "path", "location", "category", "files"}
)


class Descriptor(BaseModel):
    """A validated app descriptor.

    ``name``, ``category``, ``owner``, ``repo`` and ``path`` build slugs
    and filenames, so they are strings (numbers are coerced).
    ``description``, ``version`` and ``commit`` keep whatever JSON value
    the author wrote, as long as it is not null or "".

    ``location`` is derived at load time (the directory holding the
    metadata.json, with forward slashes) and is never emitted.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    name: str
    category: str
    description: Any
    version: Any
    commit: Any
    owner: str
    repo: str
    path: str

    location: str = ""

    @field_validator("description", "version", "commit")
    @classmethod
    def check_present(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("must not be null or empty")
        return value

    def to_dict(self) -> dict:
        """Declared fields in declaration order, then pass-through fields in file order."""
        return self.model_dump()
