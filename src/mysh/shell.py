"""Interactive input loop: line editing, history recall and dispatch."""

from __future__ import annotations

import logging

from mysh.builtins import Dispatcher, ShellContext
from mysh.commands import CommandResult, Status
from mysh.config import DEFAULT_PROMPT, CustomizationOption
from mysh.terminal import KeyKind, TerminalIO

logger = logging.getLogger(__name__)


class Shell:
    """Reads lines in raw mode and hands them to the dispatcher.

    Raw mode is left before every dispatch, since built-ins print ordinary
    buffered output and may read a confirmation line, and entered again when
    the next line is edited. It is always restored when run() returns.

    Args:
        context: Shared shell state (config, history, output).
        terminal: Source of key events and sink for echoed input.
        dispatcher: Command dispatcher. Built from ``context`` if omitted.
    """

    def __init__(
        self,
        context: ShellContext,
        terminal: TerminalIO,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._ctx = context
        self._terminal = terminal
        self._dispatcher = dispatcher or Dispatcher(context)

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def run(self) -> int:
        """Run until Escape, end of input or ``kill``. Returns the exit status."""
        try:
            while True:
                line = self.read_line()
                if line is None:
                    return 0
                result = self.submit(line)
                if result.status is Status.EXIT:
                    return 0
        finally:
            self._terminal.leave_raw_mode()

    def read_line(self) -> str | None:
        """Edit one line in raw mode. Returns None when the user pressed Escape."""
        terminal = self._terminal
        history = self._ctx.history
        terminal.enter_raw_mode()
        buffer: list[str] = []
        self._render_prompt()

        while True:
            key = terminal.read_key()
            if key.kind is KeyKind.CHAR:
                buffer.append(key.char)
                terminal.write(key.char)
            elif key.kind is KeyKind.BACKSPACE:
                if buffer:
                    buffer.pop()
                    terminal.erase_char()
            elif key.kind in (KeyKind.UP, KeyKind.DOWN):
                entry = history.previous() if key.kind is KeyKind.UP else history.next()
                self._replace_line(entry)
                buffer = list(entry)
            elif key.kind is KeyKind.ENTER:
                terminal.newline()
                return "".join(buffer)
            elif key.kind is KeyKind.INTERRUPT:
                terminal.write("^C")
                terminal.newline()
                buffer.clear()
                history.reset_cursor()
                self._render_prompt()
            elif key.kind in (KeyKind.ESCAPE, KeyKind.EOF):
                terminal.newline()
                terminal.leave_raw_mode()
                logger.debug("Input loop ended by %s", key.kind.value)
                return None

    def submit(self, line: str) -> CommandResult:
        """Record a finished line and dispatch it with raw mode off.

        Ctrl-C while a command runs abandons that command, not the shell.
        """
        history = self._ctx.history
        if not line.strip():
            history.reset_cursor()
            return CommandResult.ok()

        self._terminal.leave_raw_mode()
        self._terminal.erase_previous_line()
        try:
            history.append(line)
        except OSError as e:
            logger.warning("Could not write history file %s: %s", history.path, e)
            self._ctx.output.error(f"Failed to write history: {e}")
        history.reset_cursor()

        try:
            return self._dispatcher.dispatch(line)
        except KeyboardInterrupt:
            logger.debug("Command %r interrupted", line)
            self._ctx.output.print()
            return CommandResult.error("Interrupted")

    def prompt_text(self) -> str:
        """The configured prompt, always ending in whitespace."""
        text = self._ctx.config.get(CustomizationOption.PROMPT_TEXT) or DEFAULT_PROMPT
        if not text[-1].isspace():
            text += " "
        return text

    def _render_prompt(self) -> None:
        config = self._ctx.config
        color = None
        if config.get(CustomizationOption.PROMPT_COLOR) is not None:
            color = config.get_color(CustomizationOption.PROMPT_COLOR)
        self._ctx.output.print(self.prompt_text(), color, end="")

    def _replace_line(self, text: str) -> None:
        self._terminal.clear_line()
        self._render_prompt()
        self._terminal.write(text)
