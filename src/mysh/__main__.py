"""Entry point for mysh."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mysh.builtins import ShellContext
from mysh.config import ConfigStore
from mysh.exceptions import StartupError
from mysh.history import HistoryStore
from mysh.output import Output
from mysh.process import ProcessLauncher
from mysh.settings import ShellSettings
from mysh.shell import Shell
from mysh.terminal import Terminal, TerminalIO

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Command line arguments. If None, uses sys.argv.
    """
    parser = argparse.ArgumentParser(prog="mysh", description="A small interactive shell")
    parser.add_argument("--history-file", type=Path, help="History file (~/.mysh_history)")
    parser.add_argument("--config-file", type=Path, help="Config file (~/.mysh_config)")
    parser.add_argument("--log-file", type=Path, help="Write log records to this file")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    parser.add_argument(
        "--no-external",
        action="store_true",
        help="Do not run unknown commands as external programs",
    )
    return parser.parse_args(argv)


def configure_logging(settings: ShellSettings) -> None:
    """Send log records to the log file, or to stderr when none is set.

    Raises:
        StartupError: If the log file cannot be opened.
    """
    if settings.log_file is not None:
        try:
            handler: logging.Handler = logging.FileHandler(settings.log_file)
        except OSError as e:
            raise StartupError(f"Cannot open log file {settings.log_file}: {e}") from e
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("mysh")
    root.handlers[:] = [handler]
    root.setLevel(settings.log_level)


def build_shell(settings: ShellSettings, terminal: TerminalIO | None = None) -> Shell:
    """Load the history and config files and wire up a Shell.

    Raises:
        StartupError: If either file cannot be loaded.
    """
    try:
        history = HistoryStore.load(settings.history_path)
        config = ConfigStore.load(settings.config_path)
    except OSError as e:
        raise StartupError(str(e)) from e
    terminal = terminal or Terminal()
    context = ShellContext(
        config=config,
        history=history,
        output=Output(config),
        read_line=terminal.read_line,
        launcher=ProcessLauncher(),
        external_commands=settings.external_commands,
    )
    return Shell(context, terminal)


def main(argv: list[str] | None = None) -> int:
    """Run the shell. Returns the process exit status."""
    args = parse_args(argv)
    try:
        settings = ShellSettings.load(
            history_path=args.history_file,
            config_path=args.config_file,
            log_file=args.log_file,
            log_level=logging.DEBUG if args.verbose else None,
            external_commands=False if args.no_external else None,
        )
        configure_logging(settings)
        shell = build_shell(settings)
    except StartupError as e:
        print(f"mysh: {e}", file=sys.stderr)
        return 1
    return shell.run()


if __name__ == "__main__":
    sys.exit(main())
