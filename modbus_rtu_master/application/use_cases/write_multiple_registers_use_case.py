"""WriteMultipleRegistersUseCase (function code 0x10)."""

import logging
from typing import Sequence

from ...domain.value_objects import FunctionCode
from ...infrastructure.protocol import FrameCodec
from ..services import RequestOrchestrator

_LOGGER = logging.getLogger(__name__)


class WriteMultipleRegistersUseCase:
    """Writes consecutive holding registers in one request. Not retried."""

    def __init__(self, orchestrator: RequestOrchestrator, codec: FrameCodec):
        self._orchestrator = orchestrator
        self._codec = codec

    async def execute(self, slave: int, start: int, values: Sequence[int]) -> bytes:
        """Write ``values`` starting at ``start`` on ``slave``.

        Returns:
            The slave's acknowledgement frame
        """
        packet = self._codec.build_variable_packet(
            slave, FunctionCode.WRITE_MULTIPLE_REGISTERS, start, values
        )

        _LOGGER.debug(
            "Writing %d registers from 0x%04X on slave %d", len(values), start, slave
        )

        return await self._orchestrator.request(packet)
