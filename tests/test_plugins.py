"""Tests for plugin registration, loading and the built-in plugins."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import rubo.plugins.help  # noqa: F401  registers "help"
import rubo.plugins.ping  # noqa: F401  registers "ping"
from rubo.exceptions import PluginLoadError
from rubo.message import TextMessage, User
from rubo.plugins import PLUGINS, register, resolve
from rubo.robot import Robot


@pytest.fixture(autouse=True)
def restore_plugin_table():
    """Keep plugins registered by a test from leaking into others."""
    saved = dict(PLUGINS)
    yield
    PLUGINS.clear()
    PLUGINS.update(saved)


def _make_robot(name="Rubo"):
    robot = Robot("shell", name=name, logger=MagicMock())
    robot.adapter = AsyncMock()
    return robot


def _text(text):
    return TextMessage(User(id="1", name="alice", room="general"), text)


def _sent(robot):
    return [call.args[1:] for call in robot.adapter.send.call_args_list]


def test_resolve_by_registered_name():
    @register("greeter")
    def greeter(robot):
        pass

    assert resolve("greeter") == [("greeter", greeter)]


def test_resolve_module_path_imports_and_registers():
    found = resolve("rubo.plugins.ping")
    assert [name for name, _ in found] == ["ping"]


def test_resolve_unknown_name_raises():
    with pytest.raises(PluginLoadError) as exc_info:
        resolve("nope")
    assert exc_info.value.plugin == "nope"


def test_resolve_missing_module_raises():
    with pytest.raises(PluginLoadError, match="Cannot import"):
        resolve("rubo.plugins.does_not_exist")


def test_resolve_module_without_plugins_raises():
    with pytest.raises(PluginLoadError, match="registers no plugins"):
        resolve("rubo.pattern")


def test_load_plugin_failure_is_fatal_and_logged():
    @register("broken")
    def broken(robot):
        raise RuntimeError("cannot register")

    robot = _make_robot()
    with pytest.raises(SystemExit) as exc_info:
        robot.load_plugin("broken")

    assert exc_info.value.code == 1
    assert robot.logger.error.call_args.args[0] == "plugin_load_failed"


def test_load_plugins_stops_at_first_failure():
    calls = []

    @register("first")
    def first(robot):
        calls.append("first")

    @register("second")
    def second(robot):
        raise RuntimeError("boom")

    @register("third")
    def third(robot):
        calls.append("third")

    robot = _make_robot()
    with pytest.raises(SystemExit):
        robot.load_plugins("first", "second", "third")

    assert calls == ["first"]


def test_load_plugin_parses_module_help_once():
    robot = _make_robot()
    robot.load_plugin("rubo.plugins.help")
    robot.load_plugin("help")

    helps = [c for c in robot.commands if c.startswith("rubo help")]
    assert helps == [
        "rubo help - Displays all of the help commands that rubo knows about.",
        "rubo help <query> - Displays all help commands that match <query>.",
    ]


def test_plugin_named_twice_is_loaded_once():
    robot = _make_robot()
    robot.load_plugins("help", "rubo.plugins.help")

    assert len(robot.listeners) == 1
    robot.logger.warning.assert_called_once_with(
        "plugin_already_loaded", plugin="help", entry="rubo.plugins.help"
    )


# -------------------------------------------------------------------
# ping
# -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_ping_plugin_registers_commands_and_listeners():
    robot = _make_robot()
    robot.load_plugin("rubo.plugins.ping")

    assert len(robot.listeners) == 4
    assert robot.commands == [
        "rubo die - End rubo process",
        "rubo echo <text> - Reply back with <text>",
        "rubo ping - Reply with pong",
        "rubo time - Reply with current time",
    ]


@pytest.mark.asyncio
async def test_ping_replies_pong():
    robot = _make_robot()
    robot.load_plugin("ping")

    await robot.receive(_text("rubo ping"))

    assert _sent(robot) == [("PONG",)]


@pytest.mark.asyncio
async def test_echo_sends_capture_back():
    robot = _make_robot()
    robot.load_plugin("rubo.plugins.ping")

    await robot.receive(_text("Rubo: echo some words"))

    assert _sent(robot) == [("some words",)]


@pytest.mark.asyncio
async def test_time_reports_server_time():
    robot = _make_robot()
    robot.load_plugin("rubo.plugins.ping")

    await robot.receive(_text("rubo time"))

    (text,), = _sent(robot)
    assert text.startswith("Server time is: ")


@pytest.mark.asyncio
async def test_die_says_goodbye_and_shuts_down():
    robot = _make_robot()
    robot.load_plugin("rubo.plugins.ping")

    await robot.receive(_text("rubo die"))

    assert _sent(robot) == [("Goodbye, cruel world.",)]
    robot.adapter.close.assert_awaited_once()
    assert robot.brain.closed is True


# -------------------------------------------------------------------
# help
# -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_help_lists_all_commands_with_robot_name():
    robot = _make_robot(name="Hal")
    robot.load_plugins("rubo.plugins.help", "rubo.plugins.ping")

    await robot.receive(_text("hal help"))

    (text,), = _sent(robot)
    lines = text.split("\n")
    assert "Hal ping - Reply with pong" in lines
    assert "Hal die - End Hal process" in lines
    assert len(lines) == 6


@pytest.mark.asyncio
async def test_help_filters_by_query():
    robot = _make_robot()
    robot.load_plugins("rubo.plugins.help", "rubo.plugins.ping")

    await robot.receive(_text("rubo help echo"))

    assert _sent(robot) == [("Rubo echo <text> - Reply back with <text>",)]


@pytest.mark.asyncio
async def test_help_reports_no_match():
    robot = _make_robot()
    robot.load_plugin("rubo.plugins.help")

    await robot.receive(_text("rubo help dance"))

    assert _sent(robot) == [("No available commands match dance",)]
