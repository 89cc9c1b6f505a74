"""
Descriptor loader — read, parse and validate a single metadata.json.

Two failure classes, both non-fatal to the run:
    - read/parse failure (I/O error, malformed or too deeply nested
      JSON, not an object)
    - schema failure (first required field that is missing, null or "")

Each failure logs exactly one warning naming the file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from releasegen.core.models.descriptor import REQUIRED_FIELDS, Descriptor

logger = logging.getLogger(__name__)


@dataclass
class LoadOutcome:
    """Result of loading one descriptor file."""

    path: Path
    descriptor: Descriptor | None = None
    error: str | None = None
    missing_field: str | None = None

    @property
    def valid(self) -> bool:
        return self.descriptor is not None

    def to_dict(self) -> dict:
        result: dict = {"path": str(self.path), "valid": self.valid}
        if self.descriptor is not None:
            result["name"] = self.descriptor.name
            result["category"] = self.descriptor.category
        if self.error:
            result["error"] = self.error
        if self.missing_field:
            result["missing_field"] = self.missing_field
        return result


def descriptor_location(path: Path) -> str:
    """The directory holding *path*, with forward slashes."""
    return str(path.parent).replace("\\", "/")


def _first_missing_field(data: dict) -> str | None:
    for field in REQUIRED_FIELDS:
        if field not in data or data[field] is None or data[field] == "":
            return field
    return None


def inspect_descriptor(path: Path) -> LoadOutcome:
    """Load *path* and report why it is invalid, if it is.

    Logs one warning per invalid file; never raises for bad content.
    """
    outcome = LoadOutcome(path=path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as e:
        logger.warning("Skipping %s: %s", path, e)
        outcome.error = str(e)
        return outcome

    if not isinstance(data, dict):
        outcome.error = f"expected a JSON object, got {type(data).__name__}"
        logger.warning("Skipping %s: %s", path, outcome.error)
        return outcome

    missing = _first_missing_field(data)
    if missing:
        logger.warning("Skipping %s: missing or empty field '%s'", path, missing)
        outcome.missing_field = missing
        outcome.error = f"missing or empty field '{missing}'"
        return outcome

    # location is always derived, never taken from the file
    data = {k: v for k, v in data.items() if k != "location"}
    data["location"] = descriptor_location(path)

    try:
        outcome.descriptor = Descriptor.model_validate(data)
    except ValidationError as e:
        field = _first_invalid_field(e)
        outcome.missing_field = field
        outcome.error = f"invalid value for field '{field}'"
        logger.warning("Skipping %s: invalid value for field '%s'", path, field)
        return outcome

    logger.debug("Loaded descriptor %s from %s", outcome.descriptor.name, path)
    return outcome


def _first_invalid_field(error: ValidationError) -> str:
    """The first required field (in declared order) named by *error*."""
    names = {str(err["loc"][0]) for err in error.errors() if err.get("loc")}
    for field in REQUIRED_FIELDS:
        if field in names:
            return field
    return sorted(names)[0] if names else "?"


def load_descriptor(path: Path) -> Descriptor | None:
    """Load one descriptor, or None if it is unreadable or incomplete."""
    return inspect_descriptor(path).descriptor
