"""Forward bytes from a child process pipe to callbacks."""

from __future__ import annotations

import logging
import threading
from typing import BinaryIO, Callable

logger = logging.getLogger(__name__)

Pump = Callable[[bytes], None]


class StreamPumper:
    """Background thread copying a binary stream into one or more pumps.

    Each chunk is whatever a single ``read()`` returns, so with an
    unbuffered pipe the pumps see output as soon as the process flushes
    it. The thread ends at EOF or on the first read error.
    """

    def __init__(self, stream: BinaryIO, name: str = "pump", chunk_size: int = 4096) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._pumps: list[Pump] = []
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def add_pump(self, pump: Pump) -> StreamPumper:
        """Register a callback receiving each chunk. Returns self."""
        self._pumps.append(pump)
        return self

    def start(self) -> StreamPumper:
        self._thread.start()
        return self

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the stream to reach EOF. Returns True if the pump ended."""
        if self._thread.ident is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        try:
            while True:
                try:
                    data = self._stream.read(self._chunk_size)
                except (OSError, ValueError) as e:
                    # ValueError: stream closed under us by terminate()
                    logger.debug("Pump %s ended: %s", self._thread.name, e)
                    break
                if not data:
                    break
                for pump in self._pumps:
                    pump(data)
        except Exception:
            logger.exception("Pump %s callback failed", self._thread.name)
