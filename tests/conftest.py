"""Shared fixtures: fast configs and sessions running tests/fake_jdb.py."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from jdbharness.config import HarnessConfig
from jdbharness.jdb.session import JdbSession

FAKE_JDB = str(Path(__file__).with_name("fake_jdb.py"))


def fake_jdb_command(*args: str) -> list[str]:
    return [sys.executable, "-u", FAKE_JDB, *args]


@pytest.fixture
def fast_config() -> HarnessConfig:
    """Short timeouts for tests that expect a wait to fail."""
    return HarnessConfig(poll_interval=0.05, timeout=0.5, line_separator="\n")


@pytest.fixture
def process_config() -> HarnessConfig:
    """Generous timeout for tests that drive a real subprocess."""
    return HarnessConfig(poll_interval=0.05, timeout=10.0, line_separator="\n")


@pytest.fixture
def fake_jdb(process_config: HarnessConfig) -> Iterator[Callable[..., JdbSession]]:
    """Factory launching fake jdb sessions; all are closed after the test."""
    sessions: list[JdbSession] = []

    def _launch(*args: str, config: HarnessConfig | None = None) -> JdbSession:
        session = JdbSession.launch(fake_jdb_command(*args), config or process_config)
        sessions.append(session)
        return session

    yield _launch

    for session in sessions:
        session.close()


@pytest.fixture
def jdb_command() -> list[str]:
    """Command line starting a fake jdb with default behaviour."""
    return fake_jdb_command()
