"""RequestOrchestrator: the single request/response chokepoint.

Every operation passes through ``request()``: append CRC, submit to the
transport, await one reply, validate its CRC, return it unchanged.
"""

import logging
from typing import Optional

from ...const import EXCEPTION_FLAG, EXCEPTION_RESPONSE_SIZE
from ...domain.exceptions import ModbusSlaveError
from ...domain.interfaces import ITransport
from ...domain.value_objects import ExceptionCode
from ...infrastructure.protocol import FrameCodec

_LOGGER = logging.getLogger(__name__)


class RequestOrchestrator:
    """Submits framed requests and validates framed responses.

    The orchestrator does no framing of its own and never retries.
    Transport errors and CRC errors propagate unchanged to the caller.

    Example:
        >>> orchestrator = RequestOrchestrator(transport)
        >>> header = codec.build_fixed_packet(1, 0x03, 0, 2)
        >>> response = await orchestrator.request(header)
    """

    def __init__(self, transport: ITransport, codec: Optional[FrameCodec] = None):
        """Initialize orchestrator.

        Args:
            transport: Transport that serializes access to the line
            codec: Frame codec for CRC handling (default: new FrameCodec)
        """
        self._transport = transport
        self._codec = codec or FrameCodec()

    @property
    def transport(self) -> ITransport:
        return self._transport

    async def request(self, frame: bytes) -> bytes:
        """Run one request/response cycle.

        Args:
            frame: Request header without CRC

        Returns:
            Response frame, CRC included, unchanged

        Raises:
            ModbusCrcError: If the response CRC is invalid
            ModbusSlaveError: If the slave answered with an exception response
            ModbusTimeoutError, ModbusTransportError, SerialException:
                Propagated from the transport
        """
        packet = self._codec.add_crc(frame)
        response = await self._transport.send(packet)

        self._codec.validate_crc(response)

        function_code = response[1]
        if function_code & EXCEPTION_FLAG and len(response) >= EXCEPTION_RESPONSE_SIZE:
            exception_code = ExceptionCode.from_wire(response[2])
            _LOGGER.debug(
                "Slave %d returned exception 0x%02X for function 0x%02X",
                response[0],
                exception_code,
                function_code & 0x7F,
            )
            raise ModbusSlaveError(function_code & 0x7F, exception_code)

        return response
