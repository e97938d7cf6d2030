"""Tests for jdbharness.jdb.command.JdbCommand."""

from __future__ import annotations

import dataclasses

import pytest

from jdbharness.jdb.command import JdbCommand


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------


class TestJdbCommandFlags:
    def test_defaults(self) -> None:
        cmd = JdbCommand("where")
        assert cmd.cmd == "where"
        assert cmd.allow_simple_prompt is False
        assert cmd.allow_exit is False

    def test_exit_allowed_returns_copy(self) -> None:
        cmd = JdbCommand("cont")
        allowed = cmd.exit_allowed()
        assert allowed.allow_exit is True
        assert cmd.allow_exit is False
        assert allowed.cmd == "cont"

    def test_reply_is_simple_prompt(self) -> None:
        cmd = JdbCommand("stop in Foo.bar").reply_is_simple_prompt()
        assert cmd.allow_simple_prompt is True
        assert cmd.allow_exit is False

    def test_builders_chain(self) -> None:
        cmd = JdbCommand("x").exit_allowed().reply_is_simple_prompt()
        assert cmd.allow_exit and cmd.allow_simple_prompt

    def test_frozen(self) -> None:
        cmd = JdbCommand("where")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cmd.cmd = "locals"  # type: ignore[misc]

    def test_str(self) -> None:
        assert str(JdbCommand("threads")) == "threads"


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


class TestJdbCommandFactories:
    def test_run(self) -> None:
        assert JdbCommand.run().cmd == "run"
        assert JdbCommand.run().allow_simple_prompt

    def test_run_with_args(self) -> None:
        assert JdbCommand.run("Hello", "arg1").cmd == "run Hello arg1"

    def test_cont_does_not_allow_exit(self) -> None:
        cont = JdbCommand.cont()
        assert cont.cmd == "cont"
        assert not cont.allow_exit

    def test_quit_allows_exit(self) -> None:
        assert JdbCommand.quit().allow_exit

    def test_stop_at(self) -> None:
        cmd = JdbCommand.stop_at("pkg.Hello", 42)
        assert cmd.cmd == "stop at pkg.Hello:42"
        assert cmd.allow_simple_prompt

    def test_stop_in(self) -> None:
        assert JdbCommand.stop_in("Hello", "main").cmd == "stop in Hello.main"

    @pytest.mark.parametrize(
        ("caught", "uncaught", "expected"),
        [
            (True, True, "catch java.io.IOException"),
            (True, False, "catch caught java.io.IOException"),
            (False, True, "catch uncaught java.io.IOException"),
        ],
    )
    def test_catch_modes(self, caught: bool, uncaught: bool, expected: str) -> None:
        assert JdbCommand.catch("java.io.IOException", caught, uncaught).cmd == expected

    def test_catch_requires_a_mode(self) -> None:
        with pytest.raises(ValueError):
            JdbCommand.catch("E", caught=False, uncaught=False)

    def test_ignore(self) -> None:
        assert JdbCommand.ignore("E", caught=False).cmd == "ignore uncaught E"

    def test_watch(self) -> None:
        assert JdbCommand.watch("Foo", "bar").cmd == "watch Foo.bar"
        assert JdbCommand.watch("Foo", "bar", access=True).cmd == "watch access Foo.bar"

    def test_inspection_commands(self) -> None:
        assert JdbCommand.print_("x + 1").cmd == "print x + 1"
        assert JdbCommand.dump("obj").cmd == "dump obj"
        assert JdbCommand.eval_("a.b()").cmd == "eval a.b()"
        assert JdbCommand.set_("x", "7").cmd == "set x = 7"
        assert JdbCommand.locals().cmd == "locals"
        assert JdbCommand.methods("Foo").cmd == "methods Foo"
        assert JdbCommand.fields("Foo").cmd == "fields Foo"

    def test_optional_argument_commands(self) -> None:
        assert JdbCommand.where().cmd == "where"
        assert JdbCommand.where("all").cmd == "where all"
        assert JdbCommand.clear().cmd == "clear"
        assert JdbCommand.clear("Foo:12").cmd == "clear Foo:12"
        assert JdbCommand.trace_methods().cmd == "trace methods"

    def test_stepping(self) -> None:
        assert JdbCommand.step().cmd == "step"
        assert JdbCommand.step_up().cmd == "step up"
        assert JdbCommand.next().cmd == "next"

    def test_threads(self) -> None:
        assert JdbCommand.threads().cmd == "threads"
        assert JdbCommand.thread(3).cmd == "thread 3"
