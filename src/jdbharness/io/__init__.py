"""Process I/O plumbing: output sink, stream pumps and bounded reads."""

from jdbharness.io.buffer import OutputHandler
from jdbharness.io.pump import StreamPumper
from jdbharness.io.readers import read_fully, read_n_bytes

__all__ = [
    "OutputHandler",
    "StreamPumper",
    "read_fully",
    "read_n_bytes",
]
