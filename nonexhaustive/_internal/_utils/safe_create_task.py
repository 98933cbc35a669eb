import asyncio
import inspect
import traceback
from collections.abc import Awaitable, Callable, Coroutine

from .._framework.logger import Logger, ERROR


def safe_create_task(
    coro: Coroutine,
    logger: Logger | None = None,
    name: str | None = None,
    on_failure: Callable[[BaseException, str | None, str], Awaitable[None] | None] | None = None,
) -> asyncio.Task:
    """
    Run an effect coroutine as a task that never kills the test's event loop.

    - `asyncio.CancelledError` propagates so cancelling an effect works normally.
    - Any other exception is logged at ERROR and handed to `on_failure`; the
      store uses that hook to report the failure at its next operation.
    """
    if name is None and hasattr(coro, "__name__"):
        name = coro.__name__

    async def _notify(exception: BaseException, tb: str) -> None:
        if not on_failure:
            return
        maybe_awaitable = on_failure(exception, name, tb)
        if inspect.isawaitable(maybe_awaitable):
            await maybe_awaitable

    async def wrapper():
        try:
            await coro
        except asyncio.CancelledError:
            raise
        except Exception as e:
            tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            if logger:
                await logger._log(
                    ERROR,
                    f"[Exception in effect]{f' ({name})' if name else ''}: {e}",
                    traceback=tb,
                )
            await _notify(e, tb)

    return asyncio.create_task(wrapper(), name=name)
