"""Tests for the command registry."""

from mysh.commands import CommandRegistry, CommandResult, Status


def _ok(args: list[str]) -> CommandResult:
    return CommandResult.ok()


class TestCommandRegistry:
    """Tests for CommandRegistry."""

    def test_register_and_list(self) -> None:
        """Registered commands appear in list."""
        registry = CommandRegistry()
        registry.register("help", _ok, "Show help")
        assert registry.list_commands() == [("help", "Show help")]

    def test_list_keeps_registration_order(self) -> None:
        registry = CommandRegistry()
        registry.register("pwd", _ok, "Print directory")
        registry.register("cd", _ok, "Change directory")
        assert [name for name, _desc in registry.list_commands()] == ["pwd", "cd"]

    def test_usage_defaults_to_name(self) -> None:
        registry = CommandRegistry()
        registry.register("kill", _ok, "Exit")
        registry.register("cd", _ok, "Change directory", usage="cd [directory]")
        assert registry.list_usages() == ["kill", "cd [directory]"]

    def test_get_returns_spec(self) -> None:
        """get() returns the registered handler and metadata."""
        registry = CommandRegistry()
        registry.register("mkdir", _ok, "Make directory", usage="mkdir [directory]")
        spec = registry.get("mkdir")
        assert spec is not None
        assert spec.handler is _ok
        assert spec.usage == "mkdir [directory]"

    def test_get_unknown_returns_none(self) -> None:
        registry = CommandRegistry()
        registry.register("++", _ok, "Create file")
        assert registry.get("--") is None
        assert registry.get("frobnicate") is None

    def test_reregister_replaces(self) -> None:
        registry = CommandRegistry()
        registry.register("pwd", _ok, "Old")
        registry.register("pwd", _ok, "New")
        assert registry.list_commands() == [("pwd", "New")]

    def test_split(self) -> None:
        assert CommandRegistry.split("ls | wc -l") == ("ls", ["|", "wc", "-l"])
        assert CommandRegistry.split("  mkdir  a/b   c ") == ("mkdir", ["a/b", "c"])
        assert CommandRegistry.split("   ") is None
        assert CommandRegistry.split("") is None


class TestCommandResult:
    """Tests for CommandResult."""

    def test_ok_is_not_error(self) -> None:
        assert CommandResult.ok().is_error is False

    def test_error_carries_message(self) -> None:
        result = CommandResult.error("boom")
        assert result.status is Status.ERROR
        assert result.message == "boom"
        assert result.is_error

    def test_unknown_names_token(self) -> None:
        result = CommandResult.unknown("frob")
        assert result.status is Status.UNKNOWN
        assert result.message == "Command not found: frob"
        assert result.is_error

    def test_exit_is_not_error(self) -> None:
        assert CommandResult.exit().is_error is False
