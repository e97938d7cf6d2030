"""Exceptions raised while driving a jdb session."""

from __future__ import annotations


class JdbError(RuntimeError):
    """Base class for jdb session failures."""


class JdbLaunchError(JdbError):
    """jdb could not be located or spawned."""


class JdbTimeoutError(JdbError):
    """The expected reply never arrived.

    Raised both when jdb stays silent for the whole timeout and when it
    exits while a reply that does not tolerate exit is awaited.
    """

    def __init__(self, pattern: str, lines: int, timeout: float) -> None:
        self.pattern = pattern
        self.lines = lines
        self.timeout = timeout
        super().__init__(
            f"wait_for_msg timed out after {timeout:g} seconds, "
            f"looking for '{pattern}', in {lines} lines"
        )


class JdbWriteError(JdbError):
    """Writing a command to jdb stdin failed."""

    def __init__(self, cmd: str) -> None:
        self.cmd = cmd
        super().__init__(
            f"Unexpected IO error while writing command '{cmd}' to jdb stdin stream"
        )


class JdbTerminatedError(JdbError):
    """A command was sent to a jdb process that has already exited."""

    def __init__(self, cmd: str) -> None:
        self.cmd = cmd
        super().__init__(f"Attempt to send command '{cmd}' to terminated jdb")


class DebuggeeNotExitedError(JdbError):
    """The debuggee was still alive after the allowed number of ``cont``s."""

    def __init__(self, max_times: int) -> None:
        self.max_times = max_times
        super().__init__(f"Debuggee did not exit after {max_times} <cont> commands")
