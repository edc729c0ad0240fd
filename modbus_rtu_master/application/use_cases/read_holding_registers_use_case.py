"""ReadHoldingRegistersUseCase (function code 0x03)."""

import logging
from typing import Any

from ...domain.value_objects import DecodeAs, FunctionCode, ReadFormat
from ...infrastructure.protocol import FrameCodec, ResponseDecoder
from ..services import RequestOrchestrator

_LOGGER = logging.getLogger(__name__)


class ReadHoldingRegistersUseCase:
    """Reads a block of holding registers and decodes the payload.

    Not retried: a CRC or transport failure goes straight to the caller.

    Example:
        >>> use_case = ReadHoldingRegistersUseCase(orchestrator, codec, decoder)
        >>> await use_case.execute(1, 0x0000, 2, DecodeAs(DataType.UINT16))
        [10, 20]
    """

    def __init__(
        self,
        orchestrator: RequestOrchestrator,
        codec: FrameCodec,
        decoder: ResponseDecoder,
    ):
        self._orchestrator = orchestrator
        self._codec = codec
        self._decoder = decoder

    async def execute(
        self, slave: int, start: int, length: int, read_format: ReadFormat
    ) -> Any:
        """Read ``length`` registers from ``start`` on ``slave``.

        Returns:
            Decoded values, or whatever a ``Transform`` returns

        Raises:
            ValueError: If an argument does not fit its frame field, or
                length is not a whole number of values of the data type
            ModbusCrcError, ModbusDecodeError, ModbusSlaveError: On bad replies
        """
        if isinstance(read_format, DecodeAs):
            per_value = read_format.data_type.register_count
            if length % per_value:
                raise ValueError(
                    f"Length {length} is not a multiple of {per_value} registers "
                    f"required by {read_format.data_type.value}"
                )

        packet = self._codec.build_fixed_packet(
            slave, FunctionCode.READ_HOLDING_REGISTERS, start, length
        )

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Reading %d registers from 0x%04X on slave %d", length, start, slave
            )

        response = await self._orchestrator.request(packet)
        payload = self._decoder.get_data_payload(response)

        return self._decoder.decode(payload, read_format)
