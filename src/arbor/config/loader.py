#
# config/loader.py
#
"""
Builds RunOptions from a TOML config file and explicit overrides.

Precedence: explicit overrides (CLI options, which already include their
environment variables) > config file > defaults.
"""

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import attrs
import structlog

from arbor.config.models import RunOptions
from arbor.exceptions import ConfigurationError
from arbor.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.loader")

RUN_TABLE = "run"
_KNOWN_KEYS = frozenset(a.name for a in attrs.fields(RunOptions))


def _read_run_table(config_path: Path) -> dict[str, Any]:
    try:
        with config_path.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file '{config_path}': {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in config file '{config_path}': {e}") from e

    table = data.get(RUN_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"'[{RUN_TABLE}]' in '{config_path}' must be a table.")

    unknown = sorted(set(table) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s) in '[{RUN_TABLE}]' of '{config_path}': {unknown}. "
            f"Valid options: {sorted(_KNOWN_KEYS)}"
        )
    return table


def load_config(
    config_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> RunOptions:
    """
    Loads run options.

    Args:
        config_path: Optional TOML file with a ``[run]`` table.
        overrides: Option values that take precedence over the file. ``None``
            values are treated as "not given".

    Returns:
        The validated RunOptions.

    Raises:
        ConfigurationError: If the file cannot be read or any value is invalid.
    """
    values: dict[str, Any] = {}
    if config_path is not None:
        values.update(_read_run_table(config_path))
        log.debug("Config file loaded", config_path=str(config_path), keys=sorted(values))

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if isinstance(value, tuple | list) and not value and key in values:
            continue
        values[key] = value

    try:
        options = RunOptions(**values)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid run options: {e}") from e

    log.debug("Run options resolved", options=attrs.asdict(options))
    return options

# 🔼⚙️
