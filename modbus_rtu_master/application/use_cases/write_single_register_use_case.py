"""WriteSingleRegisterUseCase (function code 0x06).

The only operation retried automatically.
"""

from typing import Optional

from ...domain.value_objects import FunctionCode
from ...infrastructure.protocol import FrameCodec
from ..services import RequestOrchestrator, RetryController


class WriteSingleRegisterUseCase:
    """Writes one holding register through the retry controller.

    Example:
        >>> use_case = WriteSingleRegisterUseCase(orchestrator, codec, controller, 10)
        >>> ack = await use_case.execute(1, 0x0010, 300, retry_count=3)
        >>> assert ack[1] == FunctionCode.WRITE_SINGLE_REGISTER
    """

    def __init__(
        self,
        orchestrator: RequestOrchestrator,
        codec: FrameCodec,
        retry_controller: RetryController,
        default_retry_count: int,
    ):
        self._orchestrator = orchestrator
        self._codec = codec
        self._retry_controller = retry_controller
        self._default_retry_count = default_retry_count

    async def execute(
        self,
        slave: int,
        register: int,
        value: int,
        retry_count: Optional[int] = None,
    ) -> bytes:
        """Write ``value`` to ``register`` on ``slave``.

        Args:
            retry_count: Attempts for this call; None uses the configured default

        Returns:
            The slave's acknowledgement frame

        Raises:
            ValueError: If an argument does not fit its frame field
            ModbusRetryLimitExceeded: If every attempt failed
        """
        packet = self._codec.build_fixed_packet(
            slave, FunctionCode.WRITE_SINGLE_REGISTER, register, value
        )

        if retry_count is None:
            retry_count = self._default_retry_count

        return await self._retry_controller.execute(
            lambda: self._orchestrator.request(packet),
            slave=slave,
            register=register,
            value=value,
            retry_count=retry_count,
        )
