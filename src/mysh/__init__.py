"""mysh: a small interactive shell with history recall and persisted customization."""

from mysh.builtins import Dispatcher, ShellContext
from mysh.colors import Color
from mysh.commands import CommandRegistry, CommandResult, Status
from mysh.config import ConfigStore, CustomizationOption
from mysh.exceptions import (
    CommandNotFoundError,
    ConfigError,
    HistoryError,
    MyshError,
    SpawnError,
    StartupError,
)
from mysh.history import HistoryStore
from mysh.settings import ShellSettings
from mysh.shell import Shell

__version__ = "0.1.0"

__all__ = [
    "Color",
    "CommandNotFoundError",
    "CommandRegistry",
    "CommandResult",
    "ConfigError",
    "ConfigStore",
    "CustomizationOption",
    "Dispatcher",
    "HistoryError",
    "HistoryStore",
    "MyshError",
    "Shell",
    "ShellContext",
    "ShellSettings",
    "SpawnError",
    "StartupError",
    "Status",
]
