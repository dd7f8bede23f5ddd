"""Build log sinks the step reports to."""

from __future__ import annotations

import threading
from typing import Protocol, TextIO


class BuildListener(Protocol):
    def println(self, message: str) -> None:
        ...


class StreamListener:
    """Write build log lines to a text stream, flushing after each one."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def println(self, message: str) -> None:
        with self._lock:
            self._stream.write(f"{message}\n")
            self._stream.flush()
