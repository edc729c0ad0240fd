"""Connection guard decorator."""

import logging
from functools import wraps
from typing import Callable

from ...domain.exceptions import ModbusTransportError

_LOGGER = logging.getLogger(__name__)


def require_connection(func: Callable):
    """Fail fast when the transport is not connected.

    The decorated coroutine must be a method of an object exposing
    ``is_connected``. Reconnection is left to the caller.

    Example:
        @require_connection
        async def send(self, data: bytes) -> bytes:
            # Line is open - just do work
            ...
    """

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        if not self.is_connected:
            _LOGGER.error("%s called while not connected", func.__qualname__)
            raise ModbusTransportError("Transport is not connected")
        return await func(self, *args, **kwargs)

    return wrapper
