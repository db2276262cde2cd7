"""Named predicate pipeline for validating user input."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

Rule = Callable[[str], bool]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of running a validator. ``failed_rule`` names the first rule that failed."""

    ok: bool
    failed_rule: str | None = None

    def __bool__(self) -> bool:
        return self.ok


class Validator:
    """Ordered list of named rules, evaluated until the first failure."""

    def __init__(self) -> None:
        self._rules: list[tuple[str, Rule]] = []

    def add_rule(self, name: str, rule: Rule) -> Validator:
        """Append a rule. Returns self so rules can be chained."""
        self._rules.append((name, rule))
        return self

    def validate(self, value: str) -> ValidationResult:
        for name, rule in self._rules:
            if not rule(value):
                return ValidationResult(ok=False, failed_rule=name)
        return ValidationResult(ok=True)


def file_name_validator(cwd: Path | None = None) -> Validator:
    """Rules checked before ``++`` creates a file.

    Args:
        cwd: Directory relative names are resolved against. Defaults to the
            process working directory.
    """
    base = cwd if cwd is not None else Path.cwd()
    return (
        Validator()
        .add_rule("file_name", lambda name: bool(name))
        .add_rule("file_does_not_exist", lambda name: not (base / name).exists())
    )
