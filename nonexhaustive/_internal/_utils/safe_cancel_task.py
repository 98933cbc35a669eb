import asyncio

from .._framework.logger import Logger, WARNING


async def safe_cancel_task(
    task: asyncio.Task,
    label: str = "task",
    timeout: float = 1.0,
    logger: Logger | None = None,
) -> bool:
    """Cancel `task` and wait up to `timeout` seconds for it to unwind.

    Returns True when the task finished within the grace period.
    """
    if task.done():
        return True
    task.cancel()
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if done:
        return True
    if logger:
        await logger._log(
            WARNING,
            f"{label} did not finish within {timeout}s of being cancelled",
            task_name=label,
        )
    return False
