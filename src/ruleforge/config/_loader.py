# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

import os
import tomllib
from pathlib import Path
from typing import Any

from ruleforge.exceptions import ConfigLoadError

ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "RULEFORGE_LOG_LEVEL": ("logging", "level"),
    "RULEFORGE_LOG_FORMAT": ("logging", "format"),
    "RULEFORGE_DOCS_DIR": ("lifecycle", "docs_dir"),
    "RULEFORGE_RULES_DIR": ("lifecycle", "rules_dir"),
}
"""Environment variables recognized by the loader and the key they set."""


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=e.lineno,
            column=e.colno,
        ) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
        - Missing keys in override preserve base values
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = _copy_value(base[key])
        elif key not in base:
            result[key] = _copy_value(override[key])
        elif isinstance(base[key], dict) and isinstance(override[key], dict):
            result[key] = deep_merge(base[key], override[key])
        else:
            result[key] = _copy_value(override[key])

    return result


def _copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    if isinstance(value, dict):
        return {k: _copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy_value(item) for item in value]
    return value


def parse_env_vars() -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect configuration overrides from the environment.

    Only the variables in ENV_OVERRIDES are read; empty values are ignored.

    Returns:
        Nested dictionary suitable for `deep_merge`.
    """
    result: dict[str, dict[str, str]] = {}
    for name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(name, "")
        if not value:
            continue
        if section == "logging":
            value = value.lower()
        result.setdefault(section, {})[key] = value
    return result
