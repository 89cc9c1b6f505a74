"""
JSON file output — atomic writes for release files.

Writes go to a temp file in the target directory which is then renamed
over the destination, so a crash mid-write never leaves a truncated
release file behind. Output is 2-space indented UTF-8 with a trailing
newline, which keeps repeated runs byte-identical.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def dump_json(data: Any) -> str:
    """Serialize *data* the way every release file is written."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(data: Any, path: Path) -> None:
    """Write *data* to *path* as JSON (atomic write).

    Args:
        data: JSON-serializable document.
        path: Target file. Its parent directory must exist.

    Raises:
        OSError: If the temp file cannot be created, written or renamed.
    """
    content = dump_json(data)

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".release_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        tmp.replace(path)
        logger.debug("Wrote %s", path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
