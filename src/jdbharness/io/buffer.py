"""Line-splitting output sink shared by the jdb stdout/stderr pumps."""

from __future__ import annotations

import codecs
import os
import threading


class OutputHandler:
    """Thread-safe sink for jdb stdout/stderr.

    Keeps two buffers:

    * **raw** (``_raw``): bytes written by the pump threads since the
      last ``get()``.
    * **cached** (``_cached``): decoded lines collected by ``get()``,
      cleared by ``reset()``.

    If the last chunk absorbed by ``get()`` ended without a line
    separator, the last cached entry is a partial line, and the first
    segment of the next chunk is appended to it. If it did end with a
    separator, the last cached entry is ``""``.

    All operations share one ``threading.Condition``; ``write()``
    notifies it so a waiting controller wakes up as soon as data arrives.
    """

    def __init__(self, encoding: str = "utf-8", line_separator: str = os.linesep) -> None:
        if not line_separator:
            raise ValueError("line_separator must not be empty")
        self._raw = bytearray()
        self._cached: list[str] = []
        # Decoded text that may be the start of a split separator
        self._held = ""
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._sep = line_separator
        self._cond = threading.Condition()

    @property
    def line_separator(self) -> str:
        return self._sep

    def write(self, data: bytes) -> None:
        """Append raw bytes and wake any waiter."""
        if not data:
            return
        with self._cond:
            self._raw.extend(data)
            self._cond.notify_all()

    def wait_for_data(self, timeout: float | None = None) -> bool:
        """Block until undecoded bytes are pending (or timeout).

        Returns True if data is pending, False on timeout.
        """
        with self._cond:
            if not self._raw:
                self._cond.wait(timeout)
            return bool(self._raw)

    def get(self) -> tuple[str, ...]:
        """Absorb pending bytes and return every line since the last reset.

        The returned tuple is a snapshot; later writes do not change it.
        """
        with self._cond:
            if self._raw:
                self._absorb(final=False)
            return tuple(self._cached)

    def flush(self) -> tuple[str, ...]:
        """Like ``get()``, but also absorb text held back at a chunk boundary.

        Call once the writers are done: an incomplete multi-byte character
        decodes to U+FFFD and a trailing partial separator stays in the
        last line.
        """
        with self._cond:
            self._absorb(final=True)
            return tuple(self._cached)

    def _absorb(self, final: bool) -> None:
        text = self._held + self._decoder.decode(bytes(self._raw), final=final)
        self._raw.clear()
        self._held = ""
        if final:
            if not text:
                return
        elif len(self._sep) > 1:
            for n in range(len(self._sep) - 1, 0, -1):
                if text.endswith(self._sep[:n]):
                    self._held = text[-n:]
                    text = text[:-n]
                    break
        new_lines = text.split(self._sep)
        if self._cached:
            new_lines[0] = self._cached.pop() + new_lines[0]
        self._cached.extend(new_lines)

    def reset(self) -> list[str]:
        """Return the lines collected by ``get()`` or ``flush()`` and clear them.

        Pending raw bytes are not touched.
        """
        with self._cond:
            result = list(self._cached)
            self._cached.clear()
            return result

    def updated(self) -> bool:
        """True if bytes arrived since the last ``get()``."""
        with self._cond:
            return bool(self._raw)
