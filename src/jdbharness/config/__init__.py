"""Configuration: Pydantic model for jdb session settings."""

from __future__ import annotations

import json
import os
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field


class HarnessConfig(BaseModel):
    """Settings for a single jdb session.

    Every session carries its own copy, so two sessions in the same
    process can run with different timeouts.
    """

    poll_interval: float = Field(
        default=1.0,
        gt=0,
        description="Seconds to wait for new jdb output between checks",
    )
    timeout: float = Field(
        default=60.0,
        gt=0,
        description=(
            "Seconds of silence after which a wait fails. The clock restarts "
            "whenever jdb produces output."
        ),
    )
    encoding: str = Field(default="utf-8", description="jdb stdio encoding")
    line_separator: str = Field(
        default=os.linesep, min_length=1, description="Line separator in jdb output"
    )
    test_jdk: str | None = Field(
        default=None, description="JDK home used to locate the jdb tool"
    )
    chunk_size: int = Field(
        default=4096, gt=0, description="Bytes per read from jdb stdout/stderr"
    )

    @classmethod
    def load(cls, config_path: str | None = None) -> HarnessConfig:
        """Load config from file, env vars, or defaults.

        Priority: env vars > config file > defaults.

        Env vars:
            JDB_HARNESS_POLL_INTERVAL  - Poll interval in seconds
            JDB_HARNESS_TIMEOUT        - Silence timeout in seconds
            JDB_HARNESS_ENCODING       - jdb stdio encoding
            TEST_JDK                   - JDK home containing bin/jdb
        """
        load_dotenv(find_dotenv(usecwd=True), override=False)

        config_data: dict[str, Any] = {}

        if config_path and os.path.exists(config_path):
            with open(config_path) as f:
                config_data = json.load(f)

        env_poll = os.environ.get("JDB_HARNESS_POLL_INTERVAL")
        if env_poll:
            config_data["poll_interval"] = float(env_poll)

        env_timeout = os.environ.get("JDB_HARNESS_TIMEOUT")
        if env_timeout:
            config_data["timeout"] = float(env_timeout)

        env_encoding = os.environ.get("JDB_HARNESS_ENCODING")
        if env_encoding:
            config_data["encoding"] = env_encoding

        env_jdk = os.environ.get("TEST_JDK")
        if env_jdk:
            config_data["test_jdk"] = env_jdk

        return cls.model_validate(config_data)
