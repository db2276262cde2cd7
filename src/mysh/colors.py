"""Color names understood by the shell."""

from __future__ import annotations

from enum import Enum


class Color(Enum):
    """Terminal colors. The value is the textual name stored in the config file."""

    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"
    YELLOW = "Yellow"
    MAGENTA = "Magenta"
    CYAN = "Cyan"
    WHITE = "White"
    BLACK = "Black"

    @property
    def style(self) -> str:
        """Rich style name for this color."""
        return self.value.lower()

    @classmethod
    def parse(cls, text: str | None) -> Color | None:
        """Look up a color by name (case-insensitive), or None if unknown."""
        if text is None:
            return None
        return _BY_NAME.get(text.strip().lower())

    @classmethod
    def from_name(cls, text: str | None, default: Color | None = None) -> Color:
        """Look up a color by name, falling back to ``default`` (Red) if unknown."""
        color = cls.parse(text)
        if color is None:
            return default if default is not None else cls.RED
        return color

    @classmethod
    def names(cls) -> list[str]:
        """All color names in declaration order."""
        return [color.value for color in cls]


_BY_NAME: dict[str, Color] = {color.value.lower(): color for color in Color}
