"""Colored message output for the shell."""

from __future__ import annotations

from rich.console import Console
from rich.style import Style

from mysh.colors import Color
from mysh.config import ConfigStore, CustomizationOption

RULE = "\n--------------------\n"


class Output:
    """Renders text in a color, resolving configured colors on every call.

    User-supplied text (paths, file names) is printed verbatim: rich markup,
    emoji codes and highlighting are disabled.

    Args:
        config: Store providing the configured text, background and error colors.
        console: Console to write to. Defaults to stdout.
    """

    def __init__(self, config: ConfigStore | None = None, console: Console | None = None) -> None:
        self._config = config
        self.console = console or Console(markup=False, emoji=False, highlight=False)

    def print(
        self,
        text: str = "",
        color: Color | None = None,
        *,
        background: Color | None = None,
        bold: bool = False,
        italic: bool = False,
        end: str = "\n",
    ) -> None:
        """Print ``text`` in ``color`` (terminal default when None)."""
        style = Style(
            color=color.style if color else None,
            bgcolor=background.style if background else None,
            bold=bold or None,
            italic=italic or None,
        )
        self.console.print(text, style=style, end=end, soft_wrap=True)

    def text(self, text: str = "", *, end: str = "\n") -> None:
        """Print regular command output in the configured text/background colors."""
        self.print(
            text,
            self._configured(CustomizationOption.TEXT_COLOR),
            background=self._configured(CustomizationOption.BACKGROUND_COLOR),
            end=end,
        )

    def error(self, text: str) -> None:
        """Print an error message in the configured error color (Red by default)."""
        color = (
            self._config.get_color(CustomizationOption.ERROR_COLOR) if self._config else Color.RED
        )
        self.print(text, color)

    def success(self, text: str) -> None:
        self.print(text, Color.GREEN)

    def rule(self) -> None:
        """Print the blue separator used around bordered listings."""
        self.print(RULE, Color.BLUE)

    def _configured(self, option: CustomizationOption) -> Color | None:
        if self._config is None or self._config.get(option) is None:
            return None
        return self._config.get_color(option)
