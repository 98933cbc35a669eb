from .logger import Logger


class NoOpLogger(Logger):
    async def log(self, level: int, msg: str, **kwargs) -> None:
        return None
