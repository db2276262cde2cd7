"""Built-in commands and the dispatcher that runs them."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from mysh.colors import Color
from mysh.commands import CommandRegistry, CommandResult
from mysh.config import ConfigStore, CustomizationOption
from mysh.exceptions import CommandNotFoundError, SpawnError
from mysh.history import HistoryStore
from mysh.output import Output
from mysh.process import ProcessLauncher
from mysh.validator import file_name_validator

logger = logging.getLogger(__name__)

PIPE_TOKEN = "|"


@dataclass
class ShellContext:
    """State shared by the input loop and the built-in commands.

    Args:
        config: Customization options, persisted on every change.
        history: Command history and its navigation cursor.
        output: Sink for command output and error messages.
        read_line: Reads one line of user input (used by confirmations).
        launcher: Spawns external processes.
        external_commands: Run unknown tokens as external programs.
    """

    config: ConfigStore
    history: HistoryStore
    output: Output
    read_line: Callable[[], str]
    launcher: ProcessLauncher = field(default_factory=ProcessLauncher)
    external_commands: bool = True


class Dispatcher:
    """Runs a command line against the built-in table.

    Every command returns a CommandResult. Error results are rendered in the
    configured error color; an exception escaping a command is logged and
    turned into an error result so the input loop keeps running.
    """

    def __init__(self, context: ShellContext) -> None:
        self._ctx = context
        self._registry = CommandRegistry()
        self._register_builtin_commands()

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def _register_builtin_commands(self) -> None:
        """Register the built-in commands."""
        register = self._registry.register
        register(
            "cd", self._cmd_cd, "Navigates to the specified directory.", usage="cd [directory]"
        )
        register(
            "ls",
            self._cmd_ls,
            "Displays the files and directories within the specified directory.",
            usage="ls [directory] [| command]",
        )
        register(
            "mkdir",
            self._cmd_mkdir,
            "Creates a new directory with the given name.",
            usage="mkdir [directory]",
        )
        register(
            "++",
            self._cmd_create,
            "Creates a new file with the specified name.",
            usage="++ [file_name]",
        )
        register("--", self._cmd_delete, "Deletes the specified file.", usage="-- [file_name]")
        register("kill", self._cmd_kill, "Terminates the shell session.")
        register("pwd", self._cmd_pwd, "Displays the path of the current working directory.")
        register(
            "dircontent",
            self._cmd_dircontent,
            "Lists the contents of the specified directory.",
            usage="dircontent [directory]",
        )
        register("clear", self._cmd_clear, "Clears the command history.")
        register(
            "customize",
            self._cmd_customize,
            "Changes a customization option (see 'customize --help').",
            usage="customize <option> [value]",
        )
        register(
            "help",
            self._cmd_help,
            "Provides a list of available commands and their descriptions.",
        )

    def dispatch(self, line: str) -> CommandResult:
        """Run one command line and report any error it produced."""
        parts = CommandRegistry.split(line)
        if parts is None:
            return CommandResult.ok()
        name, args = parts
        logger.debug("Dispatching %r with args %r", name, args)

        spec = self._registry.get(name)
        try:
            if spec is None:
                result = self._run_external(name, args)
            else:
                result = spec.handler(args)
        except Exception as e:
            logger.exception("Command %r failed", name)
            result = CommandResult.error(f"{name}: {e}")

        if result.is_error and result.message:
            self._ctx.output.error(result.message)
        return result

    def _run_external(self, name: str, args: list[str]) -> CommandResult:
        if not self._ctx.external_commands:
            return CommandResult.unknown(name)
        try:
            self._ctx.launcher.run([name, *args])
        except CommandNotFoundError:
            return CommandResult.unknown(name)
        except SpawnError as e:
            return CommandResult.error(str(e))
        return CommandResult.ok()

    # --- Built-in command handlers ---

    def _cmd_cd(self, args: list[str]) -> CommandResult:
        """Change the working directory (default /)."""
        target = args[0] if args else "/"
        try:
            os.chdir(target)
        except OSError as e:
            return CommandResult.error(f"cd: {target}: {e.strerror or e}")
        return CommandResult.ok()

    def _cmd_ls(self, args: list[str]) -> CommandResult:
        """List a directory, or pipe the listing into another command."""
        if PIPE_TOKEN in args[:2]:
            return self._ls_pipe(args)

        path = args[0] if args else "."
        try:
            names = sorted(entry.name for entry in Path(path).iterdir())
        except OSError as e:
            return CommandResult.error(f"Failed to read directory {path}: {e.strerror or e}")
        output = self._ctx.output
        output.text()
        for name in names:
            output.text(f"\t> {name.lstrip()}")
        output.text()
        return CommandResult.ok()

    def _ls_pipe(self, args: list[str]) -> CommandResult:
        index = args.index(PIPE_TOKEN)
        listing_args, consumer = args[:index], args[index + 1 :]
        if not consumer:
            return CommandResult.error("ls: missing command after '|'")
        try:
            self._ctx.launcher.pipe(["ls", *listing_args], consumer)
        except SpawnError as e:
            return CommandResult.error(str(e))
        return CommandResult.ok()

    def _cmd_mkdir(self, args: list[str]) -> CommandResult:
        """Create directories, including missing parents."""
        if not args:
            return CommandResult.error("Error: Missing directory name for mkdir command")
        for name in args:
            try:
                Path(name).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                return CommandResult.error(f"Failed to create directory: {e}")
        return CommandResult.ok()

    def _cmd_create(self, args: list[str]) -> CommandResult:
        """Create a new empty file (``++``)."""
        if not args:
            return CommandResult.error("Error: Missing file name argument for ++ command")
        name = args[0]
        validation = file_name_validator().validate(name)
        if not validation:
            return CommandResult.error(f"Invalid input: {validation.failed_rule} ({name})")
        try:
            # "x" refuses to overwrite a file created since validation
            with open(name, "x"):
                pass
        except OSError as e:
            return CommandResult.error(f"Failed to create file: {e}")
        self._ctx.output.success("\nFile created successfully!\n")
        return CommandResult.ok()

    def _cmd_delete(self, args: list[str]) -> CommandResult:
        """Delete a file after a yes/no confirmation (``--``)."""
        if not args:
            return CommandResult.error("Error: No file specified for -- command")
        name = args[0]
        full_path = Path.cwd() / name
        if not (full_path.exists() or full_path.is_symlink()):
            return CommandResult.error(f"File not found: {name}")
        if full_path.is_dir() and not full_path.is_symlink():
            return CommandResult.error(f"--: {name}: is a directory")

        output = self._ctx.output
        output.error(f"\nAre you sure you want to delete {name} (yes/no)?")
        try:
            answer = self._ctx.read_line()
        except KeyboardInterrupt:
            output.print()
            answer = ""
        if answer.strip() != "yes":
            output.text("Deletion canceled.")
            return CommandResult.ok()
        try:
            full_path.unlink()
        except OSError as e:
            return CommandResult.error(f"Failed to delete file: {e}")
        output.success(f"\nFile deleted: {name}\n")
        return CommandResult.ok()

    def _cmd_kill(self, args: list[str]) -> CommandResult:
        """Exit the shell."""
        return CommandResult.exit()

    def _cmd_pwd(self, args: list[str]) -> CommandResult:
        self._ctx.output.text(str(Path.cwd()))
        return CommandResult.ok()

    def _cmd_help(self, args: list[str]) -> CommandResult:
        """Show usage and a description of every command."""
        output = self._ctx.output
        output.rule()
        output.print("Commands:\n", bold=True)
        output.print("Usage:", Color.YELLOW)
        for usage in self._registry.list_usages():
            output.print(f"  {usage}")
        output.print("\nFunctionality:", Color.YELLOW)
        for name, description in self._registry.list_commands():
            output.print(f"  {name:<10} : {description}", italic=True)
        output.rule()
        return CommandResult.ok()

    def _cmd_dircontent(self, args: list[str]) -> CommandResult:
        """Bordered listing of full entry paths (default /)."""
        path = args[0] if args else "/"
        try:
            entries = sorted(Path(path).iterdir())
        except OSError as e:
            return CommandResult.error(f"Failed to read directory {path}: {e.strerror or e}")
        output = self._ctx.output
        output.rule()
        output.print(f"Contents of {path}:", bold=True)
        for entry in entries:
            output.text(f"\t> {str(entry).replace('src/', '')}")
        output.rule()
        return CommandResult.ok()

    def _cmd_clear(self, args: list[str]) -> CommandResult:
        """Delete the history file and start a fresh one."""
        try:
            self._ctx.history.clear()
        except OSError as e:
            return CommandResult.error(f"Failed to clear history: {e}")
        self._ctx.output.text("History cleared.")
        return CommandResult.ok()

    def _cmd_customize(self, args: list[str]) -> CommandResult:
        """Set a customization option and persist the config file."""
        if not args:
            return CommandResult.error(
                "Missing customization option. Try 'customize --help'."
            )
        key = args[0]
        if key in ("--help", "help"):
            self._print_customize_help()
            return CommandResult.ok()

        option = CustomizationOption.parse(key)
        if option is None:
            return CommandResult.error(f"Unknown customization option: {key}")

        if option is CustomizationOption.PROMPT_TEXT:
            raw = " ".join(args[1:]) or None
        else:
            raw = args[1] if len(args) > 1 else None
        value, problem = _normalize_value(option, raw or option.default_value)
        if problem is not None:
            return CommandResult.error(problem)

        try:
            self._ctx.config.set(option, value)
        except OSError as e:
            return CommandResult.error(f"Failed to save config: {e}")

        message = f"{option.value} set to {value!r}"
        output = self._ctx.output
        if option is CustomizationOption.BACKGROUND_COLOR:
            output.print(message, background=Color.from_name(value))
        elif option.is_color:
            output.print(message, Color.from_name(value))
        else:
            output.text(message)
        return CommandResult.ok()

    def _print_customize_help(self) -> None:
        output = self._ctx.output
        output.rule()
        output.print("Customization options:\n", bold=True)
        for option in CustomizationOption:
            output.print(
                f"  {option.value:<18} {option.description} (default: {option.default_value!r})"
            )
        output.print("\nColors:\n", bold=True)
        for color in Color:
            output.print(f"  {color.value}", color)
        output.print("\nExample: customize Prompt_Color Cyan", Color.YELLOW)
        output.rule()


def _normalize_value(option: CustomizationOption, raw: str) -> tuple[str, str | None]:
    """Validate a customize value. Returns (value, error message or None)."""
    if option.is_color:
        color = Color.parse(raw)
        if color is None:
            return raw, f"Unknown color: {raw}. Choose one of: {', '.join(Color.names())}"
        return color.value, None
    if option is CustomizationOption.FONT_SIZE:
        if not raw.isdigit() or int(raw) <= 0:
            return raw, f"Invalid font size: {raw}"
        return str(int(raw)), None
    return raw, None
