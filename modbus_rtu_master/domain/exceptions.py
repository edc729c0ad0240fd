"""Exceptions raised by the Modbus RTU master.

Every failure is scoped to the call that produced it. Codec and decoder
errors surface synchronously; transport errors surface from ``send()``;
only the retry controller converts failures into further attempts.
"""

from __future__ import annotations

from typing import Optional, Union

from .value_objects.exception_code import ExceptionCode, format_modbus_error


class ModbusError(Exception):
    """Base class for all Modbus master errors."""


class ModbusCrcError(ModbusError):
    """Response CRC does not match the recomputed value.

    Indicates line noise or misframing. Never retried by the orchestrator.
    """

    def __init__(self, message: str = "CRC mismatch in response frame"):
        super().__init__(message)


class ModbusRetryLimitExceeded(ModbusError):
    """A single-register write exhausted its attempts.

    Attributes:
        slave: Slave address of the failed call
        register: Register that was being written
        value: Value that was being written
        attempts: Number of attempts that were configured
    """

    def __init__(self, slave: int, register: int, value: int, attempts: int):
        self.slave = slave
        self.register = register
        self.value = value
        self.attempts = attempts
        super().__init__(
            f"Retry limit exceeded: Slave {slave}; Register: {register}; "
            f"Value: {value}; Attempts: {attempts}"
        )


class ModbusTimeoutError(ModbusError, TimeoutError):
    """Base class for transport timeouts."""


class ModbusResponseTimeout(ModbusTimeoutError):
    """The slave did not answer within the response timeout."""


class ModbusQueueTimeout(ModbusTimeoutError):
    """No transport slot became free within the queue timeout."""


class ModbusTransportError(ModbusError):
    """I/O failure on the underlying line, or transport not connected."""


class ModbusSlaveError(ModbusError):
    """The slave answered with an exception response.

    Attributes:
        function_code: Function code of the request
        exception_code: ExceptionCode sent by the slave, or the raw int
            for codes outside the standard table
    """

    def __init__(
        self, function_code: int, exception_code: Union[ExceptionCode, int]
    ):
        self.function_code = function_code
        self.exception_code = ExceptionCode.from_wire(exception_code)
        super().__init__(
            f"Slave exception for function 0x{function_code:02X}: "
            f"{format_modbus_error(exception_code)}"
        )


class ModbusDecodeError(ModbusError, ValueError):
    """Response payload cannot be decoded as requested."""

    def __init__(self, message: str, payload: Optional[bytes] = None):
        self.payload = payload
        super().__init__(message)
