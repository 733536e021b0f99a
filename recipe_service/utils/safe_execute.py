"""Error handling helpers for operations that should degrade gracefully.

Used only where a failure is expected and recoverable: lenient JSON parsing of
model output and optional photo lookups. Everything else propagates.
"""

from typing import Any, Awaitable, Callable, Optional

from recipe_service.utils.logger import logger


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    """Log a recovered failure at "debug", "warning" or "error"."""
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


async def safe_execute_async(
    coro: Awaitable[Any],
    operation_name: str,
    log_level: str = "warning",
    default_return: Optional[Any] = None,
) -> Any:
    """Await `coro`, logging and returning `default_return` if it raises.

    Args:
        coro: Awaitable to execute.
        operation_name: Description for logging (e.g., "Pexels photo search").
        log_level: Logging level for the failure. Default: "warning".
        default_return: Value returned on failure. Default: None.
    """
    try:
        return await coro
    except Exception as e:
        _log_error(operation_name, e, log_level)
        return default_return


def safe_execute_sync(
    func: Callable[[], Any],
    operation_name: str,
    log_level: str = "warning",
    default_return: Optional[Any] = None,
) -> Any:
    """Synchronous counterpart of safe_execute_async for a no-argument callable."""
    try:
        return func()
    except Exception as e:
        _log_error(operation_name, e, log_level)
        return default_return
