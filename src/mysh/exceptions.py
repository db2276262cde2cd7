"""Exceptions raised by mysh."""


class MyshError(Exception):
    """Base exception for mysh errors."""

    pass


class StartupError(MyshError):
    """The shell cannot start (home directory, history or config unusable)."""

    pass


class ConfigError(StartupError):
    """Configuration file is unreadable or not a valid record."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load config file {path}: {reason}")


class HistoryError(StartupError):
    """History file is unreadable."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load history file {path}: {reason}")


class SpawnError(MyshError):
    """An external process could not be started."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


class CommandNotFoundError(SpawnError):
    """An external executable could not be located."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.reason = "not found"
        MyshError.__init__(self, f"{name} not found")
