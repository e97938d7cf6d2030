"""Tests for jdbharness.cli (run and locate commands)."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jdbharness import cli
from jdbharness.config import HarnessConfig
from jdbharness.jdb.launcher import LaunchOptions
from jdbharness.jdb.session import JdbSession

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for var in ("TEST_JDK", "JAVA_HOME", "JDB_HARNESS_TIMEOUT", "JDB_HARNESS_POLL_INTERVAL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def launched(
    monkeypatch: pytest.MonkeyPatch, jdb_command: list[str]
) -> list[tuple[LaunchOptions, HarnessConfig]]:
    """Route ``launch_local`` to the fake jdb and record its arguments."""
    calls: list[tuple[LaunchOptions, HarnessConfig]] = []

    def _launch_local(options: LaunchOptions, config: HarnessConfig) -> JdbSession:
        calls.append((options, config))
        return JdbSession.launch([*jdb_command, "--conts", "2"], config)

    monkeypatch.setattr(cli, "launch_local", _launch_local)
    return calls


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


class TestRunCommand:
    def test_scripted_session(self, launched: list) -> None:
        result = runner.invoke(
            cli.app,
            [
                "run",
                "Hello",
                "-o",
                "-Xmx64m",
                "-x",
                "stop in Hello.main",
                "-x",
                "run",
                "-x",
                "print x",
                "--cont-to-exit",
                "3",
                "--poll-interval",
                "0.05",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "> stop in Hello.main" in result.output
        assert "Breakpoint hit:" in result.output
        assert "x = 5" in result.output
        assert "Debuggee exited" in result.output

        options, config = launched[0]
        assert options == LaunchOptions("Hello", "-Xmx64m")
        assert config.poll_interval == 0.05

    def test_script_file(self, launched: list, tmp_path: Path) -> None:
        script = tmp_path / "session.jdb"
        script.write_text("# breakpoint first\nstop in Hello.main\n\nrun\nwhere\n")
        result = runner.invoke(
            cli.app, ["run", "Hello", "--script", str(script), "--poll-interval", "0.05"]
        )
        assert result.exit_code == 0, result.output
        assert "> where" in result.output
        assert "Hello.main (Hello.java:3)" in result.output
        assert "> quit" in result.output
        assert "breakpoint first" not in result.output

    def test_failure_exits_nonzero(self, launched: list) -> None:
        result = runner.invoke(
            cli.app, ["run", "Hello", "-x", "die", "--poll-interval", "0.05"]
        )
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_timeout_option(self, launched: list) -> None:
        result = runner.invoke(
            cli.app,
            ["run", "Hello", "-x", "silent", "--timeout", "1.0", "--poll-interval", "0.05"],
        )
        assert result.exit_code == 1
        assert "timed out" in result.output
        _, config = launched[0]
        assert config.timeout == 1.0


# ---------------------------------------------------------------------------
# locate
# ---------------------------------------------------------------------------


class TestLocateCommand:
    def test_prints_tool_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        tool = tmp_path / "jdk" / "bin" / ("jdb.exe" if sys.platform == "win32" else "jdb")
        tool.parent.mkdir(parents=True)
        tool.write_text("")
        monkeypatch.setenv("TEST_JDK", str(tmp_path / "jdk"))
        result = runner.invoke(cli.app, ["locate"])
        assert result.exit_code == 0
        assert result.output.strip() == str(tool)

    def test_not_found(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("jdbharness.jdb.launcher.shutil.which", lambda name: None)
        result = runner.invoke(cli.app, ["locate"])
        assert result.exit_code == 1
