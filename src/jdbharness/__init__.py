"""Launch and drive the jdb command-line debugger from tests."""

from jdbharness.config import HarnessConfig
from jdbharness.jdb import JdbCommand, JdbSession, LaunchOptions, launch_local

__version__ = "0.1.0"

__all__ = [
    "HarnessConfig",
    "JdbCommand",
    "JdbSession",
    "LaunchOptions",
    "launch_local",
]
