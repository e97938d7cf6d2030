"""CLI entry point for jdb-harness."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from jdbharness.config import HarnessConfig
from jdbharness.jdb.command import JdbCommand
from jdbharness.jdb.errors import JdbError
from jdbharness.jdb.launcher import LaunchOptions, find_jdk_tool, launch_local
from jdbharness.jdb.session import APPLICATION_EXIT, BREAKPOINT_HIT

app = typer.Typer(
    name="jdb-harness",
    help="Launch jdb on a Java class and drive it with scripted commands.",
    no_args_is_help=True,
)

console = Console(highlight=False)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_config(
    config_file: str | None,
    timeout: float | None = None,
    poll_interval: float | None = None,
) -> HarnessConfig:
    config = HarnessConfig.load(config_file)
    overrides: dict[str, float] = {}
    if timeout is not None:
        overrides["timeout"] = timeout
    if poll_interval is not None:
        overrides["poll_interval"] = poll_interval
    if overrides:
        config = HarnessConfig.model_validate({**config.model_dump(), **overrides})
    return config


def _read_script(script: Path) -> list[str]:
    """Commands from a script file, one per line. ``#`` starts a comment."""
    commands = []
    for line in script.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            commands.append(line)
    return commands


def _print_reply(cmd: str, reply: list[str]) -> None:
    console.print(Text(f"> {cmd}", style="bold cyan"))
    for line in reply:
        if BREAKPOINT_HIT in line:
            style = "yellow"
        elif APPLICATION_EXIT in line:
            style = "green"
        else:
            style = ""
        console.print(Text(line, style=style))


@app.command()
def run(
    main_class: str = typer.Argument(help="Main class of the debuggee."),
    options: str | None = typer.Option(
        None, "--options", "-o", help="JVM options for the debuggee."
    ),
    cmd: list[str] = typer.Option(
        [], "--cmd", "-x", help="jdb command to send (repeatable, sent in order)."
    ),
    script: Path | None = typer.Option(
        None,
        "--script",
        "-s",
        exists=True,
        dir_okay=False,
        help="File with jdb commands, one per line (sent after --cmd).",
    ),
    cont_to_exit: int = typer.Option(
        0,
        "--cont-to-exit",
        help="After the commands, send 'cont' up to N times until the debuggee exits.",
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Seconds of jdb silence before a wait fails."
    ),
    poll_interval: float | None = typer.Option(
        None, "--poll-interval", help="Seconds between output checks."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="Config file path."
    ),
) -> None:
    """Run a debuggee under jdb and print every reply."""
    setup_logging(verbose)
    config = _load_config(config_file, timeout, poll_interval)

    commands = list(cmd)
    if script is not None:
        commands.extend(_read_script(script))

    try:
        with launch_local(LaunchOptions(main_class, options), config) as jdb:
            _print_reply("(startup)", jdb.wait_for_simple_prompt())
            for text in commands:
                reply = jdb.command(JdbCommand(text).reply_is_simple_prompt())
                _print_reply(text, reply)
            if cont_to_exit > 0:
                jdb.cont_to_exit(cont_to_exit)
                console.print(Text("Debuggee exited", style="green"))
            elif not jdb.terminated:
                _print_reply("quit", jdb.quit())
    except JdbError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def locate(
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="Config file path."
    ),
) -> None:
    """Print the path of the jdb tool that would be launched."""
    config = _load_config(config_file)
    try:
        typer.echo(find_jdk_tool("jdb", config))
    except JdbError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
