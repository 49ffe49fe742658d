"""
Configuration loader — locate the Unity project and read generator settings.

The project root is the nearest directory (walking up) that holds both
``Assets/`` and ``ProjectSettings/``. Generator settings come from an
optional ``unity_constants.yml`` there, validated against
``GeneratorConfig``; without one, defaults apply.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from unity_constants.core.models.config import GeneratorConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "unity_constants.yml"

_PROJECT_MARKERS = ("Assets", "ProjectSettings")


class ConfigError(Exception):
    """Raised when the project or generator configuration is invalid or missing."""


def is_project_root(path: Path) -> bool:
    """True if ``path`` looks like a Unity project root."""
    return all((path / marker).is_dir() for marker in _PROJECT_MARKERS)


def find_project_root(start_dir: Path | None = None) -> Path | None:
    """Search for a Unity project root starting from the given directory, walking up.

    This allows running the generator from inside ``Assets/`` and still
    finding the project.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        The project root, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        if is_project_root(current):
            return current
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def resolve_project_root(project_dir: Path | None = None) -> Path:
    """Explicit project directory, or the discovered one.

    Raises:
        ConfigError: If no Unity project can be found.
    """
    if project_dir is not None:
        root = project_dir.resolve()
        if not is_project_root(root):
            raise ConfigError(
                f"{root} is not a Unity project (expected Assets/ and ProjectSettings/)"
            )
        return root

    root = find_project_root()
    if root is None:
        raise ConfigError(
            "No Unity project found (no Assets/ and ProjectSettings/ in this "
            "directory or its parents). Run from inside a project or pass --project."
        )
    return root


def load_config(path: Path | None = None, project_root: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to a config file. Must exist if given.
        project_root: Where to look for ``unity_constants.yml`` when
            ``path`` is None. A missing file there means defaults.

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        if project_root is None:
            return GeneratorConfig()
        path = project_root / CONFIG_FILE
        if not path.is_file():
            logger.debug("No %s in %s, using defaults", CONFIG_FILE, project_root)
            return GeneratorConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return GeneratorConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit under a "unity_constants" key or be flat
    section = data.get("unity_constants", data)
    if not isinstance(section, dict):
        raise ConfigError(f"Expected 'unity_constants' to be a mapping in {path}")

    try:
        config = GeneratorConfig.model_validate(section)
    except Exception as e:
        raise ConfigError(f"Invalid generator configuration in {path}: {e}") from e

    logger.info("Loaded generator config from %s", path)
    return config
