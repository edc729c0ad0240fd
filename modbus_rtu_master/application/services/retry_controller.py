"""RetryController: bounded retry loop for single-register writes.

The loop is an explicit state machine::

    ATTEMPTING(n) --success--> SUCCEEDED
    ATTEMPTING(n) --failure, n-1 > 0--> ATTEMPTING(n-1)
    ATTEMPTING(n) --failure, n-1 == 0--> EXHAUSTED

Every attempt and every failure is logged at INFO with the slave,
register, value and an "attempt K of N" marker.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from ...domain.exceptions import ModbusError, ModbusRetryLimitExceeded

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# Failures that consume an attempt. SerialException and TimeoutError are
# OSError subclasses.
RETRYABLE_ERRORS = (ModbusError, OSError, asyncio.TimeoutError)


class RetryState(Enum):
    """States of one retry loop."""

    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class RetryBudget:
    """Attempt counter owned by one in-flight retry loop.

    Attributes:
        total: Attempts configured for the call
        remaining: Attempts not yet consumed
    """

    total: int
    remaining: int = -1

    def __post_init__(self) -> None:
        if self.remaining < 0:
            self.remaining = self.total

    @property
    def attempt(self) -> int:
        """1-based number of the attempt about to run."""
        return self.total - self.remaining + 1

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def consume(self) -> None:
        self.remaining -= 1


class RetryController:
    """Runs a write operation until it succeeds or the budget runs out.

    Example:
        >>> controller = RetryController()
        >>> response = await controller.execute(
        ...     lambda: orchestrator.request(frame),
        ...     slave=1, register=0x0010, value=300, retry_count=3,
        ... )
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or _LOGGER

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        slave: int,
        register: int,
        value: int,
        retry_count: int,
    ) -> T:
        """Run ``operation`` with at most ``retry_count`` attempts.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt
            slave: Slave address, for log and error context
            register: Register address, for log and error context
            value: Written value, for log and error context
            retry_count: Attempts allowed; <= 0 fails without any attempt

        Returns:
            Result of the first successful attempt

        Raises:
            ModbusRetryLimitExceeded: When no attempt succeeded, chained to
                the last failure
        """
        budget = RetryBudget(total=retry_count)

        if budget.exhausted:
            self._logger.info(
                "writeSingleRegister: no attempts allowed. %s",
                self._describe(slave, register, value, budget),
            )
            raise ModbusRetryLimitExceeded(slave, register, value, retry_count)

        state = RetryState.ATTEMPTING
        last_error: Optional[BaseException] = None
        result = None

        while state is RetryState.ATTEMPTING:
            marker = self._describe(slave, register, value, budget)
            self._logger.info("writeSingleRegister: perform request. %s", marker)

            try:
                result = await operation()
            except RETRYABLE_ERRORS as err:
                last_error = err
                reason = str(err) or type(err).__name__
                self._logger.info("writeSingleRegister: %s. %s", reason, marker)
                budget.consume()
                if budget.exhausted:
                    state = RetryState.EXHAUSTED
                continue

            state = RetryState.SUCCEEDED

        if state is RetryState.EXHAUSTED:
            raise ModbusRetryLimitExceeded(
                slave, register, value, budget.total
            ) from last_error

        return result

    @staticmethod
    def _describe(slave: int, register: int, value: int, budget: RetryBudget) -> str:
        return (
            f"Slave {slave}; Register: {register}; Value: {value}; "
            f"Attempt {budget.attempt} of {budget.total}"
        )
