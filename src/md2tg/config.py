#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/config.py
"""Configuration file discovery and loading for md2tg.

This module handles automatic discovery of configuration files, loading
configs from JSON, TOML or YAML format, merging configurations with proper
priority handling, and turning the result into option objects.

A configuration has two tables, both optional:

.. code-block:: toml

    [compose]
    primary_budget = 1024
    summary_lengths = [250, 200, 150, 120, 100]

    [render]
    default_bullet = "*"

In ``pyproject.toml`` the same tables live under ``[tool.md2tg]``.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from md2tg.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from md2tg.exceptions import ConfigError
from md2tg.options.compose import ComposeOptions
from md2tg.options.entities import EntityRendererOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.md2tg] section from a pyproject.toml file.

    Returns
    -------
    dict
        Configuration from the section, or an empty dict if there is none

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading pyproject.toml {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e
        ) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root,
    checking each directory for, in priority order, ``.md2tg.toml``,
    ``.md2tg.yaml``, ``.md2tg.yml``, ``.md2tg.json`` and a ``pyproject.toml``
    with a non-empty ``[tool.md2tg]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in standard locations.

    Searches parent directories first (see :func:`find_config_in_parents`),
    then the dedicated config files in the user's home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _read_mapping(config_path: Path, loader: Any, mode: str, kind: str) -> Dict[str, Any]:
    if mode == "rb":
        with open(config_path, "rb") as f:
            config = loader(f)
    else:
        with open(config_path, "r", encoding="utf-8") as f:
            config = loader(f)

    if config is None and kind == "YAML":
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"{kind} config file must contain a mapping at root level, got {type(config).__name__}",
            config_path=str(config_path),
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is detected from the file name and extension; for
    ``pyproject.toml`` only the ``[tool.md2tg]`` section is returned.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            return _read_mapping(config_path, tomllib.load, "rb", "TOML")
        elif ext in (".yaml", ".yml"):
            return _read_mapping(config_path, yaml.safe_load, "r", "YAML")
        elif ext == ".json":
            return _read_mapping(config_path, json.load, "r", "JSON")
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(
            f"Invalid config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    raise ConfigError(
        f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", config_path=str(config_path)
    )


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries with deep merging.

    The override dictionary takes precedence over base for conflicting keys.
    Nested dictionaries are merged recursively, not replaced entirely.

    Examples
    --------
    >>> merge_configs({"compose": {"primary_budget": 900}}, {"compose": {"overflow_budget": 3000}})
    {'compose': {'primary_budget': 900, 'overflow_budget': 3000}}

    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config`` flag)
    2. Environment variable config path (``MD2TG_CONFIG``)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    ConfigError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        logger.debug("Using configuration file %s", discovered_path)
        return load_config_file(discovered_path)

    return {}


def _table(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    table = config.get(name, {})
    if not isinstance(table, Mapping):
        raise ConfigError(f"[{name}] must be a table, got {type(table).__name__}")
    return table


def options_from_config(config: Mapping[str, Any], **overrides: Any) -> ComposeOptions:
    """Build composition options from a loaded configuration.

    Parameters
    ----------
    config : mapping
        Configuration with optional ``compose`` and ``render`` tables
    **overrides
        ComposeOptions fields taking precedence over the file (CLI flags);
        None values are ignored

    Returns
    -------
    ComposeOptions
        Options with ``render_options`` built from the ``render`` table

    Raises
    ------
    ConfigError
        If a table has the wrong shape or a value is out of range

    """
    for key in config:
        if key not in ("compose", "render"):
            logger.warning("Ignoring unknown configuration section %r", key)

    compose_values = dict(_table(config, "compose"))
    compose_values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        render_options = EntityRendererOptions.from_mapping(_table(config, "render"))
        return ComposeOptions.from_mapping(compose_values).create_updated(render_options=render_options)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}", original_error=e) from e
