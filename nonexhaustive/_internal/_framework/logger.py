from abc import ABC, abstractmethod
from logging import CRITICAL, DEBUG, ERROR, INFO, WARNING, getLevelName

__all__ = ["Logger", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "level_from_name"]


def level_from_name(name: str) -> int:
    level = getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


class Logger(ABC):
    """Async logger used by stores and the effect runtime.

    Implementers only provide `log`; callers inside the package go through
    `_log`, which applies the level threshold.
    """

    def __init__(self, level: int = INFO):
        self.level = level

    @abstractmethod
    async def log(self, level: int, msg: str, **kwargs) -> None:
        """Write one record. `kwargs` are structured fields, not format args."""

    async def _log(self, level: int, msg: str, **kwargs) -> None:
        if level < self.level:
            return
        await self.log(level, msg, **kwargs)
