"""Append-only JSON-lines logger for auditing skipped assertions in CI."""

import time
from logging import getLevelName
from pathlib import Path
from typing import Any

import msgspec

from .logger import Logger, INFO


class LogRecord(msgspec.Struct, kw_only=True):
    ts: float
    level: str
    msg: str
    fields: dict[str, Any] = {}


_ENCODER = msgspec.json.Encoder(enc_hook=repr)


class JsonlLogger(Logger):
    def __init__(self, path: str | Path, level: int = INFO):
        super().__init__(level)
        self.path = Path(path)

    async def log(self, level: int, msg: str, **kwargs) -> None:
        record = LogRecord(ts=time.time(), level=getLevelName(level), msg=msg, fields=kwargs)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("ab") as f:
            f.write(_ENCODER.encode(record) + b"\n")


def read_records(path: str | Path) -> list[LogRecord]:
    decoder = msgspec.json.Decoder(LogRecord)
    with Path(path).open("rb") as f:
        return [decoder.decode(line) for line in f if line.strip()]
