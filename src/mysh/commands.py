"""Command registry for shell built-ins."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    """Outcome of running a command."""

    OK = "ok"
    ERROR = "error"
    UNKNOWN = "unknown"
    EXIT = "exit"


@dataclass(frozen=True)
class CommandResult:
    """Value returned by every command. ``message`` is shown for errors."""

    status: Status
    message: str | None = None

    @classmethod
    def ok(cls) -> CommandResult:
        return cls(Status.OK)

    @classmethod
    def error(cls, message: str) -> CommandResult:
        return cls(Status.ERROR, message)

    @classmethod
    def unknown(cls, token: str) -> CommandResult:
        return cls(Status.UNKNOWN, f"Command not found: {token}")

    @classmethod
    def exit(cls) -> CommandResult:
        return cls(Status.EXIT)

    @property
    def is_error(self) -> bool:
        return self.status in (Status.ERROR, Status.UNKNOWN)


Handler = Callable[[list[str]], CommandResult]


@dataclass(frozen=True)
class CommandSpec:
    """A registered command."""

    name: str
    handler: Handler
    description: str
    usage: str


class CommandRegistry:
    """Registry mapping command tokens to handlers.

    Commands are registered with a name (e.g., "cd"), a handler callable, a
    description and a usage string. The handler receives the whitespace-split
    arguments that follow the command name.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(
        self,
        name: str,
        handler: Handler,
        description: str,
        *,
        usage: str | None = None,
    ) -> None:
        """Register a command. Re-registering a name replaces it."""
        self._commands[name] = CommandSpec(name, handler, description, usage or name)

    def get(self, name: str) -> CommandSpec | None:
        return self._commands.get(name)

    def list_commands(self) -> list[tuple[str, str]]:
        """Return (name, description) tuples in registration order."""
        return [(spec.name, spec.description) for spec in self._commands.values()]

    def list_usages(self) -> list[str]:
        """Return usage strings in registration order."""
        return [spec.usage for spec in self._commands.values()]

    @staticmethod
    def split(text: str) -> tuple[str, list[str]] | None:
        """Split a line into (command, args), or None if it has no tokens."""
        parts = text.split()
        if not parts:
            return None
        return parts[0], parts[1:]
