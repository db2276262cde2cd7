"""Shell settings resolved from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mysh.exceptions import StartupError

HISTORY_FILE_NAME = ".mysh_history"
CONFIG_FILE_NAME = ".mysh_config"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass
class ShellSettings:
    """Where the shell keeps its files and how it behaves.

    Use ShellSettings.load() to apply ``MYSH_*`` environment variables.
    """

    history_path: Path
    config_path: Path
    external_commands: bool = True
    log_file: Path | None = None
    log_level: int = logging.WARNING

    @classmethod
    def load(cls, **overrides: Any) -> ShellSettings:
        """Build settings from defaults, then environment, then ``overrides``.

        Overrides that are None are ignored, so argparse results can be passed
        straight through.

        Raises:
            StartupError: If a default path is needed and the home directory
                cannot be determined.
        """
        env = os.environ
        values: dict[str, Any] = {}

        if env.get("MYSH_HISTORY_FILE"):
            values["history_path"] = Path(env["MYSH_HISTORY_FILE"])
        if env.get("MYSH_CONFIG_FILE"):
            values["config_path"] = Path(env["MYSH_CONFIG_FILE"])
        if env.get("MYSH_EXTERNAL"):
            values["external_commands"] = env["MYSH_EXTERNAL"].strip().lower() not in _FALSE_VALUES
        if env.get("MYSH_LOG_FILE"):
            values["log_file"] = Path(env["MYSH_LOG_FILE"])
        if env.get("MYSH_LOG_LEVEL"):
            values["log_level"] = parse_log_level(env["MYSH_LOG_LEVEL"])

        values.update({key: value for key, value in overrides.items() if value is not None})

        if "history_path" not in values:
            values["history_path"] = resolve_home() / HISTORY_FILE_NAME
        if "config_path" not in values:
            values["config_path"] = resolve_home() / CONFIG_FILE_NAME
        return cls(**values)


def resolve_home() -> Path:
    """Return the user's home directory.

    Raises:
        StartupError: If it cannot be determined.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise StartupError(f"Cannot resolve home directory: {e}") from e


def parse_log_level(name: str) -> int:
    """Convert a level name such as "debug" to a logging level (WARNING if unknown)."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING
