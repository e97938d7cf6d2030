"""Drive an interactive jdb process from a test.

jdb has no structured protocol, so replies are delimited by watching the
tail of its output for a prompt. The normal prompt is ``main[89] `` (thread
name, command counter, no end of line), but several look-alikes show up:

* ``a[89] = 10`` is an array element echo, not a prompt;
* ``main[89] main[89] ...`` follows commands that print nothing, such as
  ``trace methods``;
* ``main[89] > `` appears after ``cont``; sometimes the ``> `` comes after
  the breakpoint output instead.

The prompt pattern is therefore matched against whole lines, and only the
last few lines of output are examined.
"""

from __future__ import annotations

import logging
import re
import subprocess
import time
from collections.abc import Sequence

from tenacity import Retrying, after_log, retry_if_result, stop_after_attempt

from jdbharness.config import HarnessConfig
from jdbharness.io.buffer import OutputHandler
from jdbharness.io.pump import StreamPumper
from jdbharness.jdb.command import JdbCommand
from jdbharness.jdb.errors import (
    DebuggeeNotExitedError,
    JdbError,
    JdbLaunchError,
    JdbTerminatedError,
    JdbTimeoutError,
    JdbWriteError,
)

logger = logging.getLogger(__name__)

# jdb prompt once the debuggee is running and suspended: "<thread>[<n>] "
PROMPT_PATTERN = r"[a-zA-Z0-9_-][a-zA-Z0-9_-]*\[[1-9][0-9]*\] [ >]*$"
# jdb prompt when the debuggee is not started, or running and not suspended
SIMPLE_PROMPT = "> "
BREAKPOINT_HIT = "Breakpoint hit:"
APPLICATION_EXIT = "The application exited"
APPLICATION_DISCONNECTED = "The application has been disconnected"

# Seconds allowed for the pumps to deliver jdb's last output once it exited
_DRAIN_TIMEOUT = 1.0


def _tail_matches(
    reply: Sequence[str], pattern: re.Pattern[str], allow_simple_prompt: bool, lines: int
) -> bool:
    """True if any of the last ``lines`` lines of ``reply`` ends a reply."""
    tail = reply[max(0, len(reply) - lines):]
    return any(
        pattern.fullmatch(line) or (allow_simple_prompt and SIMPLE_PROMPT in line)
        for line in tail
    )


class JdbSession:
    """A jdb process plus the plumbing to talk to it.

    stdout and stderr are pumped by two background threads into one
    ``OutputHandler``; the relative order of lines from the two streams is
    whatever the OS delivered. Commands are written to stdin by the calling
    thread only.

    The caller owns the process: use the session as a context manager, or
    call ``quit()`` / ``terminate()`` when done.

    Usage:
        with launch_local("Hello") as jdb:
            jdb.wait_for_simple_prompt()
            jdb.command(JdbCommand.stop_in("Hello", "main"))
            jdb.command(JdbCommand.run())
            jdb.cont_to_exit(1)
    """

    def __init__(self, command_line: Sequence[str], config: HarnessConfig | None = None) -> None:
        self.command_line = list(command_line)
        self.config = config or HarnessConfig()
        self.output = OutputHandler(
            encoding=self.config.encoding,
            line_separator=self.config.line_separator,
        )
        self._proc: subprocess.Popen[bytes] | None = None
        self._pumps: list[StreamPumper] = []

    @classmethod
    def launch(
        cls, command_line: Sequence[str], config: HarnessConfig | None = None
    ) -> JdbSession:
        """Spawn jdb and return the running session."""
        session = cls(command_line, config)
        session.start()
        return session

    def start(self) -> None:
        """Spawn the process and start pumping its output."""
        if self._proc is not None:
            raise JdbError("jdb session already started")

        logger.info("Launching jdb: %s", " ".join(self.command_line))
        try:
            self._proc = subprocess.Popen(
                self.command_line,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                bufsize=0,
            )
        except OSError as e:
            raise JdbLaunchError(f"failed to launch jdb: {e}") from e

        for name, stream in (("stdout", self._proc.stdout), ("stderr", self._proc.stderr)):
            pumper = StreamPumper(
                stream,  # type: ignore[arg-type]
                name=f"jdb-{name}-{self._proc.pid}",
                chunk_size=self.config.chunk_size,
            )
            pumper.add_pump(self.output.write).start()
            self._pumps.append(pumper)

    # ------------------------------------------------------------------
    # Process state
    # ------------------------------------------------------------------

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc is not None else None

    @property
    def terminated(self) -> bool:
        """True if jdb has exited (or was never started)."""
        return self._proc is None or self._proc.poll() is not None

    def wait_for(self, timeout: float | None = None) -> bool:
        """Wait up to ``timeout`` seconds for jdb to exit.

        Returns False if it is still running when the timeout elapses.
        """
        if self._proc is None:
            return True
        try:
            self._proc.wait(timeout)
        except subprocess.TimeoutExpired:
            return False
        return True

    def terminate(self) -> None:
        """Kill jdb. No attempt is made to shut it down cleanly."""
        if self._proc is None or self._proc.poll() is not None:
            return
        try:
            self._proc.kill()
            logger.info("Killed jdb (pid=%d)", self._proc.pid)
        except ProcessLookupError:
            logger.debug("jdb already gone: %d", self._proc.pid)

    def close(self) -> None:
        """Kill jdb if needed and release its pipes."""
        if self._proc is None:
            return
        self.terminate()
        self.wait_for(_DRAIN_TIMEOUT)
        self._drain()
        if self._proc.stdin is not None:
            try:
                self._proc.stdin.close()
            except OSError:
                logger.debug("Error closing jdb stdin", exc_info=True)
        for pumper, stream in zip(self._pumps, (self._proc.stdout, self._proc.stderr)):
            if stream is not None and not pumper.alive:
                stream.close()

    def __enter__(self) -> JdbSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _drain(self) -> None:
        """Give the pumps a moment to deliver output written before exit."""
        for pumper in self._pumps:
            pumper.join(_DRAIN_TIMEOUT)

    # ------------------------------------------------------------------
    # Waiting for replies
    # ------------------------------------------------------------------

    def wait_for_msg(
        self, pattern: str, allow_simple_prompt: bool, lines: int, allow_exit: bool
    ) -> list[str]:
        """Wait until ``pattern`` shows up within the last ``lines`` lines.

        The wait fails after ``config.timeout`` seconds without any new
        output; every chunk of output restarts the clock.

        Args:
            pattern: Regex a whole line must match.
            allow_simple_prompt: Also accept any line containing ``"> "``.
            lines: How many of the most recent lines to examine.
            allow_exit: Return the collected output instead of failing if
                jdb exits before the pattern shows up.

        Returns:
            The reply lines; they are removed from the output buffer.

        Raises:
            JdbTimeoutError: Nothing matched before the timeout, or jdb
                exited and ``allow_exit`` is False.
        """
        compiled = re.compile(pattern)
        timeout = self.config.timeout
        start = time.monotonic()
        seen: tuple[str, ...] = ()
        while time.monotonic() - start < timeout:
            arrived = self.output.wait_for_data(self.config.poll_interval)
            reply = self.output.get()
            # Output can land between the wait and the snapshot
            if arrived or reply != seen:
                start = time.monotonic()
                seen = reply
            if _tail_matches(reply, compiled, allow_simple_prompt, lines):
                self._log_reply(reply)
                return self.output.reset()
            if self.terminated:
                self._drain()
                reply = self.output.flush()
                self._log_reply(reply)
                if allow_exit or _tail_matches(reply, compiled, allow_simple_prompt, lines):
                    return self.output.reset()
                raise JdbTimeoutError(pattern, lines, timeout)

        self._log_reply(self.output.get())
        raise JdbTimeoutError(pattern, lines, timeout)

    def wait_for_simple_prompt(self) -> list[str]:
        """Wait for the ``"> "`` prompt on the last line."""
        return self.wait_for_msg(SIMPLE_PROMPT, True, 1, False)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def command(self, cmd: JdbCommand | str) -> list[str]:
        """Send a command and return its reply.

        Raises:
            JdbTerminatedError: jdb already exited and ``cmd`` does not
                allow exit.
            JdbWriteError: Writing to jdb stdin failed.
            JdbTimeoutError: See ``wait_for_msg``.
        """
        if isinstance(cmd, str):
            cmd = JdbCommand(cmd)

        if self.terminated:
            if cmd.allow_exit:
                return self._remaining_output()
            raise JdbTerminatedError(cmd.cmd)

        logger.info("> %s", cmd.cmd)
        data = (cmd.cmd + self.config.line_separator).encode(self.config.encoding)
        stdin = self._proc.stdin  # type: ignore[union-attr]
        try:
            stdin.write(data)  # type: ignore[union-attr]
            stdin.flush()  # type: ignore[union-attr]
        except (OSError, ValueError) as e:
            # jdb may exit between the state check and the write
            if cmd.allow_exit and self.terminated:
                return self._remaining_output()
            raise JdbWriteError(cmd.cmd) from e

        return self.wait_for_msg(PROMPT_PATTERN, cmd.allow_simple_prompt, 1, cmd.allow_exit)

    def cont_to_exit(self, max_times: int) -> None:
        """Send ``cont`` up to ``max_times`` times until the debuggee exits.

        Raises:
            DebuggeeNotExitedError: The debuggee neither reported exit nor
                terminated jdb within ``max_times`` commands.
        """
        if max_times < 1:
            raise ValueError(f"max_times must be positive: {max_times}")

        cont = JdbCommand.cont().exit_allowed()
        retrying = Retrying(
            stop=stop_after_attempt(max_times),
            retry=retry_if_result(lambda exited: not exited),
            retry_error_callback=lambda state: state.outcome.result(),
            after=after_log(logger, logging.DEBUG),
            reraise=True,
        )
        exited = retrying(self._cont_once, cont)
        if not exited and not self.terminated:
            raise DebuggeeNotExitedError(max_times)

    def quit(self) -> list[str]:
        """Quit jdb with the ``quit`` command."""
        return self.command(JdbCommand.quit())

    def _cont_once(self, cont: JdbCommand) -> bool:
        """Send one ``cont``. True once the debuggee is gone."""
        if self.terminated:
            return True
        reply = self.output.line_separator.join(self.command(cont))
        return APPLICATION_EXIT in reply

    def _remaining_output(self) -> list[str]:
        self._drain()
        self._log_reply(self.output.flush())
        return self.output.reset()

    @staticmethod
    def _log_reply(reply: Sequence[str]) -> None:
        for line in reply:
            logger.info("[jdb] %s", line)
