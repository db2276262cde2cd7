"""Shared fixtures for mysh unit tests."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from mysh.builtins import Dispatcher, ShellContext
from mysh.config import ConfigStore
from mysh.history import HistoryStore
from mysh.output import Output
from mysh.process import ProcessLauncher


@pytest.fixture
def config(tmp_path: Path) -> ConfigStore:
    return ConfigStore.load(tmp_path / "home" / ".mysh_config")


@pytest.fixture
def history(tmp_path: Path) -> HistoryStore:
    return HistoryStore.load(tmp_path / "home" / ".mysh_history")


@pytest.fixture
def console() -> Console:
    """Plain-text console capturing everything printed."""
    return Console(
        file=io.StringIO(),
        force_terminal=False,
        color_system=None,
        width=200,
        markup=False,
        emoji=False,
        highlight=False,
    )


@pytest.fixture
def output(config: ConfigStore, console: Console) -> Output:
    return Output(config, console)


@pytest.fixture
def answers() -> list[str]:
    """Lines returned, in order, when a command asks the user for input."""
    return []


@pytest.fixture
def launcher() -> MagicMock:
    return MagicMock(spec=ProcessLauncher)


@pytest.fixture
def context(
    config: ConfigStore,
    history: HistoryStore,
    output: Output,
    answers: list[str],
    launcher: MagicMock,
) -> ShellContext:
    return ShellContext(
        config=config,
        history=history,
        output=output,
        read_line=lambda: answers.pop(0) if answers else "",
        launcher=launcher,
    )


@pytest.fixture
def dispatcher(context: ShellContext) -> Dispatcher:
    return Dispatcher(context)

