#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the treediff CLI.

This module handles automatic discovery of configuration files, loading
configs from JSON, TOML or YAML, and resolving the settings that apply to a
given document kind.

A configuration file holds option values at the top level, optionally
refined per document kind::

    mode = "ordered"
    ignore_empty_rows = true

    [csv]
    ignore_header = true
"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional, Tuple

import yaml

from treediff.constants import CONFIG_FILENAMES, DOCUMENT_KINDS, PYPROJECT_TOOL_SECTION
from treediff.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load [tool.treediff] section from pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.treediff] section, or empty dict if not found

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def _config_in_directory(directory: Path, include_pyproject: bool) -> Optional[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate

    pyproject_path = directory / "pyproject.toml"
    if include_pyproject and pyproject_path.is_file():
        try:
            if _load_pyproject_section(pyproject_path):
                return pyproject_path
        except ConfigError as e:
            # A broken pyproject.toml belongs to some other project
            logger.debug(f"Skipping {pyproject_path}: {e}")
    return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file at or above a directory.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for, in priority order, ``.treediff.toml``, ``.treediff.yaml``,
    ``.treediff.yml``, ``.treediff.json`` and a ``pyproject.toml`` with a
    ``[tool.treediff]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from, defaults to the current working directory

    Returns
    -------
    Path or None
        The first configuration file found

    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        found = _config_in_directory(directory, include_pyproject=True)
        if found is not None:
            return found
    return None


def discover_config_file(start_dir: Optional[Path] = None, home: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file, nearest directory first, then the home directory.

    ``pyproject.toml`` is not consulted in the home directory.
    """
    found = find_config_in_parents(start_dir)
    if found is not None:
        return found
    return _config_in_directory(home if home is not None else Path.home(), include_pyproject=False)


# suffix -> (label, open mode, loader, decode errors)
_FILE_LOADERS: Dict[str, Tuple[str, str, Callable[[Any], Any], Tuple[type, ...]]] = {
    ".toml": ("TOML", "rb", tomllib.load, (tomllib.TOMLDecodeError,)),
    ".yaml": ("YAML", "r", yaml.safe_load, (yaml.YAMLError,)),
    ".yml": ("YAML", "r", yaml.safe_load, (yaml.YAMLError,)),
    ".json": ("JSON", "r", json.load, (json.JSONDecodeError,)),
}


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Option values, possibly with per-kind tables. An empty file gives
        an empty dict.

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed, or does not hold a
        table of options

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    if config_path.name.lower() == "pyproject.toml":
        config = _load_pyproject_section(config_path)
    else:
        config = _load_structured_file(config_path)

    logger.debug(f"Loaded configuration from {config_path}: {sorted(config)}")
    return config


def _load_structured_file(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    if suffix not in _FILE_LOADERS:
        raise ConfigError(
            f"Unsupported config file format: {suffix or config_path.name}. Use .toml, .yaml or .json",
            str(config_path),
        )

    label, open_mode, load, decode_errors = _FILE_LOADERS[suffix]
    encoding = None if "b" in open_mode else "utf-8"
    try:
        with open(config_path, open_mode, encoding=encoding) as f:
            config = load(f)
    except decode_errors as e:
        raise ConfigError(f"Invalid {label} in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {label} config {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"{label} config file must contain a table of options, got {type(config).__name__}",
            str(config_path),
        )
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries with deep merging.

    The override dictionary takes precedence over base for conflicting keys.
    Nested dictionaries are merged recursively, not replaced entirely.

    Examples
    --------
    >>> merge_configs({'csv': {'delimiter': ';'}, 'mode': 'full'}, {'csv': {'ignore_header': True}})
    {'csv': {'delimiter': ';', 'ignore_header': True}, 'mode': 'full'}

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
    1. Explicit config file path (--config flag)
    2. Environment variable config path (TREEDIFF_CONFIG)
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
        return load_config_file(discovered_path)

    return {}


def options_for_kind(config: Dict[str, Any], kind: str) -> Dict[str, Any]:
    """Flatten a configuration into the option values for one document kind.

    Top-level values apply to every kind; a table named after the kind
    overrides them. Tables for other kinds are dropped.

    Examples
    --------
    >>> options_for_kind({"mode": "full", "xml": {"mode": "ordered"}}, "xml")
    {'mode': 'ordered'}

    """
    shared = {key: value for key, value in config.items() if key not in DOCUMENT_KINDS}
    specific = config.get(kind)
    if isinstance(specific, dict):
        return merge_configs(shared, specific)
    return shared
