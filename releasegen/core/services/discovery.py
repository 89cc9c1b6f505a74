"""
Discovery service — find every descriptor file under a repositories tree.

Pure filesystem traversal: no parsing, no validation.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR_FILENAME = "metadata.json"


def find_descriptor_files(
    root: Path,
    filename: str = DEFAULT_DESCRIPTOR_FILENAME,
) -> list[Path]:
    """Return the paths of all files named *filename* at any depth under *root*.

    A missing root yields an empty list. Traversal is depth-first with an
    explicit stack; children are visited in name order. Each directory is
    visited once by its resolved path, so symlink loops terminate.
    Unreadable directories are logged and skipped.
    """
    found: list[Path] = []

    if not root.is_dir():
        logger.debug("Descriptor root not found: %s", root)
        return found

    visited: set[Path] = set()
    stack: list[Path] = [root]

    while stack:
        directory = stack.pop()

        real = directory.resolve()
        if real in visited:
            logger.debug("Skipping already visited directory %s", directory)
            continue
        visited.add(real)

        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", directory, e)
            continue

        subdirs: list[Path] = []
        for child in children:
            if child.is_dir():
                subdirs.append(child)
            elif child.name == filename:
                found.append(child)

        # Reversed so the first subdirectory is popped first
        stack.extend(reversed(subdirs))

    return found
