"""
Configuration loader — reads release.yml and the category allow-list.

release.yml is optional: without one, every setting takes its default
and relative paths are anchored to the current directory. When it
exists it is parsed as YAML and validated against ReleaseConfig.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from releasegen.core.models.config import ReleaseConfig, ReleaseSettings

logger = logging.getLogger(__name__)

# Default config filename
RELEASE_CONFIG_FILE = "release.yml"


class ConfigError(Exception):
    """Raised when release configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for release.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to release.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / RELEASE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path) -> ReleaseConfig:
    """Load and validate a release.yml.

    Args:
        path: Path to the config file.

    Returns:
        Validated ReleaseConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading release config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "release" key or be flat
    if isinstance(data.get("release"), dict):
        data = data["release"]

    try:
        config = ReleaseConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid release configuration: {e}") from e

    logger.info("Loaded release config from %s", path)
    return config


def resolve_settings(config_path: Path | None = None) -> ReleaseSettings:
    """Build run settings from release.yml (explicit or auto-detected).

    An explicit *config_path* must exist. Without one, release.yml is
    searched upward from the current directory; if none is found the
    defaults are anchored to the current directory.

    Raises:
        ConfigError: If the config file is missing or invalid.
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            logger.debug("No %s found, using defaults", RELEASE_CONFIG_FILE)
            return ReleaseSettings.from_config(ReleaseConfig(), Path.cwd())

    config = load_config(config_path)
    return ReleaseSettings.from_config(config, config_path.parent.resolve())


def load_category_allowlist(path: Path) -> list[str]:
    """Load the advisory list of known category names.

    The list is informational only. Any failure to read or parse it is
    logged and degrades to an empty list.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not load %s: %s", path.name, e)
        return []

    if not isinstance(data, list):
        logger.warning(
            "Could not load %s: expected a JSON array, got %s",
            path.name, type(data).__name__,
        )
        return []

    return [str(item) for item in data]
