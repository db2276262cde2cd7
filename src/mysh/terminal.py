"""Raw-mode terminal input and cursor control."""

from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, TextIO

ESC = "\x1b"
# How long to wait for the rest of an escape sequence before treating ESC as a key
ESCAPE_TIMEOUT = 0.05

ERASE_CHAR = "\b \b"
CLEAR_LINE = "\r\x1b[2K"
ERASE_PREVIOUS_LINE = "\x1b[1A\r\x1b[2K"


class KeyKind(Enum):
    """Kinds of key events the line editor understands."""

    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    UP = "up"
    DOWN = "down"
    ESCAPE = "escape"
    INTERRUPT = "interrupt"
    EOF = "eof"
    OTHER = "other"


@dataclass(frozen=True)
class Key:
    """A decoded key press. ``char`` is set for CHAR events."""

    kind: KeyKind
    char: str = ""


_SIMPLE_KEYS: dict[str, KeyKind] = {
    "\r": KeyKind.ENTER,
    "\n": KeyKind.ENTER,
    "\x7f": KeyKind.BACKSPACE,
    "\x08": KeyKind.BACKSPACE,
    "\x03": KeyKind.INTERRUPT,
}

_ARROW_KEYS: dict[str, KeyKind] = {
    "A": KeyKind.UP,
    "B": KeyKind.DOWN,
}


def decode_key(read: Callable[[], str], pending: Callable[[], bool]) -> Key:
    """Decode one key event.

    Args:
        read: Returns the next input character, or "" at end of input.
        pending: Whether more input is immediately available. Used to tell a
            lone Escape press from the start of an escape sequence.
    """
    ch = read()
    if ch == "":
        return Key(KeyKind.EOF)
    if ch in _SIMPLE_KEYS:
        return Key(_SIMPLE_KEYS[ch])
    if ch == ESC:
        if not pending():
            return Key(KeyKind.ESCAPE)
        intro = read()
        if intro not in ("[", "O"):
            return Key(KeyKind.OTHER)
        final = read()
        # Skip CSI parameter bytes, e.g. "\x1b[1;5A"
        while final and final in "0123456789;":
            final = read()
        return Key(_ARROW_KEYS.get(final, KeyKind.OTHER))
    if ch.isprintable():
        return Key(KeyKind.CHAR, ch)
    return Key(KeyKind.OTHER)


class TerminalIO(Protocol):
    """What the input loop needs from a terminal."""

    def enter_raw_mode(self) -> None: ...

    def leave_raw_mode(self) -> None: ...

    def read_key(self) -> Key: ...

    def read_line(self) -> str: ...

    def write(self, text: str) -> None: ...

    def newline(self) -> None: ...

    def erase_char(self) -> None: ...

    def clear_line(self) -> None: ...

    def erase_previous_line(self) -> None: ...


class Terminal:
    """The process's controlling terminal.

    Raw mode is tracked so entering and leaving are idempotent. When stdin is
    not a TTY (e.g., input is piped) raw mode is a no-op and keys are decoded
    from the plain byte stream.

    Args:
        stdin: Input stream. Defaults to sys.stdin.
        stdout: Output stream. Defaults to sys.stdout.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._fd = self._stdin.fileno()
        self._saved_attrs: list[Any] | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def is_tty(self) -> bool:
        return os.isatty(self._fd)

    def enter_raw_mode(self) -> None:
        """Deliver key presses unbuffered and unechoed."""
        if self._saved_attrs is not None or not self.is_tty:
            return
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd, termios.TCSADRAIN)

    def leave_raw_mode(self) -> None:
        """Restore the attributes saved by enter_raw_mode()."""
        if self._saved_attrs is None:
            return
        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        self._saved_attrs = None

    def read_key(self) -> Key:
        return decode_key(self._read_char, self._pending)

    def read_line(self) -> str:
        """Read one line (without its terminator) from the same input source."""
        chars: list[str] = []
        while True:
            ch = self._read_char()
            if ch in ("", "\n"):
                return "".join(chars).rstrip("\r")
            chars.append(ch)

    def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    def newline(self) -> None:
        # Raw mode disables output post-processing, so "\n" alone does not return the carriage
        self.write("\r\n")

    def erase_char(self) -> None:
        self.write(ERASE_CHAR)

    def clear_line(self) -> None:
        self.write(CLEAR_LINE)

    def erase_previous_line(self) -> None:
        self.write(ERASE_PREVIOUS_LINE)

    def _read_char(self) -> str:
        while True:
            data = os.read(self._fd, 1)
            if not data:
                return self._decoder.decode(b"", final=True)
            text = self._decoder.decode(data)
            if text:
                return text

    def _pending(self) -> bool:
        ready, _, _ = select.select([self._fd], [], [], ESCAPE_TIMEOUT)
        return bool(ready)
