"""ModbusMaster: public operation surface.

Wires the protocol pieces, the orchestrator and the use cases around one
injected transport. The transport lives as long as the master:
``connect()`` / ``close()`` or ``async with master:``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .application.services import RequestOrchestrator, RetryController
from .application.use_cases import (
    ReadHoldingRegistersUseCase,
    WriteMultipleRegistersUseCase,
    WriteSingleRegisterUseCase,
)
from .config_loader import validate_options
from .const import CONF_DEFAULT_RETRY_COUNT, CONF_PORT
from .domain.interfaces import ITransport
from .domain.value_objects import DataType, ReadFormat, as_read_format
from .infrastructure.protocol import FrameCodec, ModbusCRC16, ResponseDecoder
from .infrastructure.transport import SerialTransport

_LOGGER = logging.getLogger(__name__)


class ModbusMaster:
    """Modbus RTU master for holding registers.

    Attributes:
        options: Validated options (see ``config_loader.OPTIONS_SCHEMA``)
        transport: The transport every request goes through

    Example:
        >>> async with ModbusMaster.from_serial("/dev/ttyUSB0", baudrate=19200) as master:
        ...     values = await master.read_holding_registers(1, 0x0000, 2)
        ...     await master.write_single_register(1, 0x0010, 300, retry_count=3)
    """

    def __init__(
        self,
        transport: ITransport,
        options: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize master.

        Args:
            transport: Transport serializing access to the line
            options: Master options; unknown keys are ignored
            logger: Logger for retry diagnostics (default: module logger)

        Raises:
            ValueError: If an option value is invalid
        """
        self.options = validate_options(options)
        self.transport = transport
        self._logger = logger or _LOGGER

        crc = ModbusCRC16()
        self._codec = FrameCodec(crc)
        self._decoder = ResponseDecoder()
        self._orchestrator = RequestOrchestrator(transport, self._codec)
        self._retry_controller = RetryController(self._logger)

        self._read_holding = ReadHoldingRegistersUseCase(
            self._orchestrator, self._codec, self._decoder
        )
        self._write_single = WriteSingleRegisterUseCase(
            self._orchestrator,
            self._codec,
            self._retry_controller,
            self.options[CONF_DEFAULT_RETRY_COUNT],
        )
        self._write_multiple = WriteMultipleRegistersUseCase(
            self._orchestrator, self._codec
        )

    @classmethod
    def from_serial(
        cls,
        port: str,
        logger: Optional[logging.Logger] = None,
        **options: Any,
    ) -> "ModbusMaster":
        """Create a master with a serial transport on ``port``.

        Args:
            port: Serial device, e.g. "/dev/ttyUSB0"
            logger: Optional logger for retry diagnostics
            **options: Master and serial options
        """
        validated = validate_options({**options, CONF_PORT: port})
        return cls(SerialTransport.from_options(validated), validated, logger)

    async def connect(self) -> None:
        """Open the transport."""
        await self.transport.connect()

    async def close(self) -> None:
        """Close the transport."""
        await self.transport.disconnect()

    async def __aenter__(self) -> "ModbusMaster":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def read_holding_registers(
        self,
        slave: int,
        start: int,
        length: int,
        read_format: Union[ReadFormat, DataType, None] = None,
    ) -> Any:
        """Read holding registers (function 0x03).

        Args:
            slave: Slave address (0-255)
            start: First register address
            length: Number of registers
            read_format: DataType, DecodeAs or Transform (default: UINT16)

        Returns:
            List of decoded values, or the result of a Transform

        Raises:
            ValueError: If length is not a whole number of values of the type
            ModbusCrcError: If the response CRC is invalid
            ModbusDecodeError: If the payload does not fit the data type
            ModbusSlaveError: If the slave sent an exception response
            ModbusTimeoutError, ModbusTransportError: From the transport
        """
        return await self._read_holding.execute(
            slave, start, length, as_read_format(read_format)
        )

    async def write_single_register(
        self,
        slave: int,
        register: int,
        value: int,
        retry_count: Optional[int] = None,
    ) -> bytes:
        """Write one holding register (function 0x06), retrying on failure.

        Args:
            slave: Slave address (0-255)
            register: Register address
            value: 16-bit value
            retry_count: Attempts; None uses ``default_retry_count``

        Returns:
            Acknowledgement frame from the slave

        Raises:
            ModbusRetryLimitExceeded: If every attempt failed, or
                retry_count <= 0
        """
        return await self._write_single.execute(slave, register, value, retry_count)

    async def write_multiple_registers(
        self, slave: int, start: int, values: Sequence[int]
    ) -> bytes:
        """Write consecutive holding registers (function 0x10). Not retried.

        Returns:
            Acknowledgement frame from the slave

        Raises:
            ModbusCrcError: If the response CRC is invalid
            ModbusSlaveError: If the slave sent an exception response
            ModbusTimeoutError, ModbusTransportError: From the transport
        """
        return await self._write_multiple.execute(slave, start, values)
