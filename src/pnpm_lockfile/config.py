"""Configuration loader for the lockfile pruning entry points.

Reads settings from a JSON file and validates it against ``SETTINGS_SCHEMA``.
Every field is optional:

- ``lockfile``: lockfile to read (default ``pnpm-lock.yaml``)
- ``output``: where the pruned lockfile is written (default
  ``out/pnpm-lock.yaml``)
- ``extraPackages``: package names pruning always keeps, e.g. global tooling
  that no workspace depends on
- ``logLevel``: level used by the command line scripts (default ``WARNING``)

The decode/encode/resolve/prune operations themselves read no configuration.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .errors import ConfigError

DEFAULT_CONFIG_FILENAME = "pnpm-lockfile.json"
CONFIG_PATH_ENV_VAR = "PNPM_LOCKFILE_CONFIG"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "lockfile": {"type": "string", "minLength": 1},
        "output": {"type": "string", "minLength": 1},
        "extraPackages": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "uniqueItems": True,
        },
        "logLevel": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
    },
}


@dataclass(slots=True, frozen=True)
class Settings:
    """Validated settings."""

    lockfile: Path = Path("pnpm-lock.yaml")
    output: Path = Path("out/pnpm-lock.yaml")
    extra_packages: tuple[str, ...] = ()
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path) -> Settings:
        """Build settings from validated JSON; relative paths resolve against ``base_dir``."""
        defaults = cls()
        return cls(
            lockfile=base_dir / data.get("lockfile", defaults.lockfile),
            output=base_dir / data.get("output", defaults.output),
            extra_packages=tuple(data.get("extraPackages", ())),
            log_level=data.get("logLevel", defaults.log_level),
        )


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _resolve_config_path(path: Path | str | None) -> tuple[Path, bool]:
    """Resolve the configuration file path and whether it was asked for explicitly.

    Priority:
    1. Explicit path argument
    2. PNPM_LOCKFILE_CONFIG environment variable
    3. pnpm-lockfile.json in the working directory
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return Path.cwd() / DEFAULT_CONFIG_FILENAME, False


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    A missing default file yields default settings; a missing file that was
    named explicitly (argument or environment variable) is an error.

    Raises:
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path, explicit = _resolve_config_path(path)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError(f"Invalid configuration in {config_path}:\n" + _format_errors(errors))

    return Settings.from_dict(data, config_path.parent)
