"""Locate the jdb tool and build its launching-connector arguments."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from jdbharness.config import HarnessConfig
from jdbharness.jdb.errors import JdbLaunchError

if TYPE_CHECKING:
    from jdbharness.jdb.session import JdbSession

logger = logging.getLogger(__name__)

LAUNCH_CONNECTOR = "com.sun.jdi.CommandLineLaunch"


@dataclass
class LaunchOptions:
    """What jdb should start under the debugger.

    Attributes:
        debuggee_class: Main class of the debuggee.
        debuggee_options: JVM options for the debuggee (e.g. ``-Xmx64m``).
    """

    debuggee_class: str
    debuggee_options: str | None = None


def connect_args(options: LaunchOptions) -> list[str]:
    """jdb arguments that launch the debuggee through the command-line connector."""
    connector = f"{LAUNCH_CONNECTOR}:"
    if options.debuggee_options is not None:
        connector += f"options={options.debuggee_options},"
    connector += f"main={options.debuggee_class}"
    return ["-connect", connector]


def find_jdk_tool(name: str, config: HarnessConfig | None = None) -> str:
    """Find a JDK tool such as ``jdb``.

    Looks in ``<jdk>/bin`` where ``<jdk>`` is ``config.test_jdk``,
    ``$TEST_JDK`` or ``$JAVA_HOME`` (first one set), then on ``PATH``.

    Raises:
        JdbLaunchError: The tool was not found anywhere.
    """
    jdk = (
        (config.test_jdk if config else None)
        or os.environ.get("TEST_JDK")
        or os.environ.get("JAVA_HOME")
    )
    exe = f"{name}.exe" if sys.platform == "win32" else name
    if jdk:
        candidate = Path(jdk).expanduser() / "bin" / exe
        if candidate.is_file():
            return str(candidate)
        logger.warning("%s not found in JDK %s, falling back to PATH", name, jdk)

    found = shutil.which(name)
    if found:
        return found
    raise JdbLaunchError(f"No {name} found. Set TEST_JDK or JAVA_HOME, or add it to PATH.")


def launch_local(
    options: LaunchOptions | str, config: HarnessConfig | None = None
) -> JdbSession:
    """Launch jdb on a local debuggee and return the running session.

    Args:
        options: Launch options, or just the debuggee main class.
        config: Session settings (defaults if omitted).
    """
    from jdbharness.jdb.session import JdbSession

    if isinstance(options, str):
        options = LaunchOptions(debuggee_class=options)
    config = config or HarnessConfig()
    command = [find_jdk_tool("jdb", config), *connect_args(options)]
    return JdbSession.launch(command, config)
