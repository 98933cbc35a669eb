import sys
from logging import getLevelName
from typing import TextIO

from .logger import Logger, INFO


class ConsoleLogger(Logger):
    """Writes `[LEVEL] msg key=value ...` lines to a text stream (stderr by default)."""

    def __init__(self, level: int = INFO, stream: TextIO | None = None):
        super().__init__(level)
        self._stream = stream

    async def log(self, level: int, msg: str, **kwargs) -> None:
        stream = self._stream or sys.stderr
        fields = " ".join(f"{k}={v!r}" for k, v in kwargs.items())
        line = f"[{getLevelName(level)}] {msg}"
        if fields:
            line = f"{line} {fields}"
        print(line, file=stream, flush=True)
