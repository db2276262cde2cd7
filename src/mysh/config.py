"""Persisted customization options (``~/.mysh_config``)."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path

from mysh.colors import Color
from mysh.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "[<Prompt>] "
DEFAULT_FONT_SIZE = "14"


class CustomizationOption(Enum):
    """The fixed set of customization options. Values are the on-disk key names."""

    TEXT_COLOR = "Text_Color"
    BACKGROUND_COLOR = "Background_Color"
    FONT_SIZE = "Font_Size"
    ERROR_COLOR = "Error_Color"
    PROMPT_COLOR = "Prompt_Color"
    PROMPT_TEXT = "Prompt_Text"

    @property
    def is_color(self) -> bool:
        """Whether the option holds a color name."""
        return self in _COLOR_OPTIONS

    @property
    def description(self) -> str:
        """One-line description for the customize help table."""
        return _DESCRIPTIONS[self]

    @property
    def default_value(self) -> str:
        """Value applied by ``customize <option>`` when no value is given."""
        return _DEFAULT_VALUES[self]

    @classmethod
    def parse(cls, text: str) -> CustomizationOption | None:
        """Look up an option by its textual name (case-insensitive)."""
        return _BY_NAME.get(text.strip().lower())


_COLOR_OPTIONS = frozenset(
    {
        CustomizationOption.TEXT_COLOR,
        CustomizationOption.BACKGROUND_COLOR,
        CustomizationOption.ERROR_COLOR,
        CustomizationOption.PROMPT_COLOR,
    }
)

_DESCRIPTIONS: dict[CustomizationOption, str] = {
    CustomizationOption.TEXT_COLOR: "Color of command output",
    CustomizationOption.BACKGROUND_COLOR: "Background color of command output",
    CustomizationOption.FONT_SIZE: "Preferred font size",
    CustomizationOption.ERROR_COLOR: "Color of error messages",
    CustomizationOption.PROMPT_COLOR: "Color of the prompt",
    CustomizationOption.PROMPT_TEXT: "Text shown before the cursor",
}

_DEFAULT_VALUES: dict[CustomizationOption, str] = {
    CustomizationOption.TEXT_COLOR: Color.WHITE.value,
    CustomizationOption.BACKGROUND_COLOR: Color.BLACK.value,
    CustomizationOption.FONT_SIZE: DEFAULT_FONT_SIZE,
    CustomizationOption.ERROR_COLOR: Color.RED.value,
    CustomizationOption.PROMPT_COLOR: Color.GREEN.value,
    CustomizationOption.PROMPT_TEXT: DEFAULT_PROMPT,
}

_BY_NAME: dict[str, CustomizationOption] = {
    option.value.lower(): option for option in CustomizationOption
}


def empty_record() -> dict[CustomizationOption, str | None]:
    """A record with every option unset."""
    return {option: None for option in CustomizationOption}


class ConfigStore:
    """The configuration record and the file it is persisted to.

    The record always holds exactly one entry per ``CustomizationOption``.
    Every ``set()`` rewrites the whole file.

    Args:
        path: Location of the JSON config file.
        values: Initial record; missing options are filled with None.
    """

    def __init__(
        self,
        path: Path,
        values: dict[CustomizationOption, str | None] | None = None,
    ) -> None:
        self._path = path
        self._values = empty_record()
        if values:
            self._values.update(values)

    @classmethod
    def load(cls, path: Path) -> ConfigStore:
        """Load the record from ``path``, writing a fresh default file if absent.

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object.
        """
        if not path.exists():
            store = cls(path)
            store.save()
            logger.debug("Created default config file %s", path)
            return store
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(path, str(e)) from e
        if not isinstance(data, dict):
            raise ConfigError(path, "expected a JSON object")
        return cls(path, _record_from_dict(data, path))

    @property
    def path(self) -> Path:
        """Location of the config file."""
        return self._path

    def get(self, option: CustomizationOption) -> str | None:
        """Return the stored value, or None if unset."""
        return self._values[option]

    def get_color(self, option: CustomizationOption, default: Color = Color.RED) -> Color:
        """Resolve an option to a Color; unset or unknown values give ``default``."""
        return Color.from_name(self._values[option], default)

    def set(self, option: CustomizationOption, value: str | None) -> None:
        """Update one option and persist the whole record."""
        self._values[option] = value
        self.save()

    def items(self) -> list[tuple[CustomizationOption, str | None]]:
        """All six (option, value) pairs in declaration order."""
        return [(option, self._values[option]) for option in CustomizationOption]

    def to_dict(self) -> dict[str, str | None]:
        """Serialize to a JSON-compatible dict keyed by option name."""
        return {option.value: value for option, value in self.items()}

    def save(self) -> None:
        """Overwrite the config file with the current record."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self.to_dict(), indent=2))
        logger.debug("Wrote config file %s", self._path)


def _record_from_dict(data: dict[str, object], path: Path) -> dict[CustomizationOption, str | None]:
    record = empty_record()
    for key, value in data.items():
        option = CustomizationOption.parse(key)
        if option is None:
            logger.warning("Ignoring unknown option %r in %s", key, path)
            continue
        record[option] = None if value is None else str(value)
    return record
