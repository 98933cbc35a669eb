import inspect
import os
from dataclasses import dataclass

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@dataclass(frozen=True)
class CallSite:
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


def capture_call_site() -> CallSite | None:
    """Return the first frame outside this package, i.e. the test line that called in."""
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = os.path.abspath(frame.f_code.co_filename)
            if not filename.startswith(_PACKAGE_DIR + os.sep) and not _is_asyncio_frame(filename):
                return CallSite(frame.f_code.co_filename, frame.f_lineno)
            frame = frame.f_back
        return None
    finally:
        del frame


def _is_asyncio_frame(filename: str) -> bool:
    return f"{os.sep}asyncio{os.sep}" in filename
