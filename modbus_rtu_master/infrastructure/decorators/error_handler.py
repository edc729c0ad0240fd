"""Error handling decorator for transport operations."""

import asyncio
import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional, Tuple

from serial import SerialException

from ...domain.exceptions import ModbusError, ModbusSlaveError


def _classify(err: BaseException) -> Tuple[int, str, bool]:
    """Return (log level, label, include traceback) for a failure."""
    if isinstance(err, (asyncio.TimeoutError, TimeoutError)):
        return logging.WARNING, "timed out", False
    if isinstance(err, ModbusSlaveError):
        return logging.WARNING, "rejected by slave", False
    if isinstance(err, ModbusError):
        # Expected protocol error - log without stack trace
        return logging.ERROR, "protocol error", False
    if isinstance(err, SerialException):
        return logging.ERROR, "serial error", False
    return logging.ERROR, "unexpected error", True


def handle_transport_errors(
    operation_name: str,
    logger: Optional[logging.Logger] = None,
    reraise: bool = True,
    default_return: Any = None,
):
    """Log transport failures in one place.

    Timeouts and slave rejections are logged at WARNING, protocol and
    serial errors at ERROR, anything else at ERROR with traceback.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use (defaults to the function's module logger)
        reraise: Whether to re-raise the exception after logging
        default_return: Value returned on error when not re-raising

    Example:
        @handle_transport_errors("Serial send", reraise=True)
        async def send(self, data: bytes) -> bytes:
            ...
    """

    def decorator(func: Callable):
        log = logger or logging.getLogger(func.__module__)

        def report(err: Exception) -> Any:
            level, label, with_traceback = _classify(err)
            log.log(
                level, "%s %s: %s", operation_name, label, err, exc_info=with_traceback
            )
            if reraise:
                raise err
            return default_return

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as err:
                return report(err)

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as err:
                return report(err)

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator
