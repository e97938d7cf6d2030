"""Sessions, commands, launching and errors for driving jdb.

A ``JdbSession`` owns one jdb process. Commands are ``JdbCommand``
values that know whether their reply may be the simple ``"> "`` prompt
and whether jdb may exit while the reply is awaited.
"""

from jdbharness.jdb.command import JdbCommand
from jdbharness.jdb.errors import (
    DebuggeeNotExitedError,
    JdbError,
    JdbLaunchError,
    JdbTerminatedError,
    JdbTimeoutError,
    JdbWriteError,
)
from jdbharness.jdb.launcher import LaunchOptions, connect_args, find_jdk_tool, launch_local
from jdbharness.jdb.session import (
    APPLICATION_DISCONNECTED,
    APPLICATION_EXIT,
    BREAKPOINT_HIT,
    PROMPT_PATTERN,
    SIMPLE_PROMPT,
    JdbSession,
)

__all__ = [
    "JdbSession",
    "JdbCommand",
    "LaunchOptions",
    "connect_args",
    "find_jdk_tool",
    "launch_local",
    # Markers
    "PROMPT_PATTERN",
    "SIMPLE_PROMPT",
    "BREAKPOINT_HIT",
    "APPLICATION_EXIT",
    "APPLICATION_DISCONNECTED",
    # Errors
    "JdbError",
    "JdbLaunchError",
    "JdbTimeoutError",
    "JdbWriteError",
    "JdbTerminatedError",
    "DebuggeeNotExitedError",
]
