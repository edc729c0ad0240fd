"""ITransport interface for transport layer implementations."""

from abc import ABC, abstractmethod


class ITransport(ABC):
    """Interface for transport layer implementations.

    The transport owns the physical line. It must serialize access so that
    at most one request/response cycle is in flight, keep queued
    transactions in FIFO order, and bound both the wait for a free slot
    (queue timeout) and the wait for a reply (response timeout).

    Connection lifecycle:
        1. connect() → opens the line
        2. send(frame) → one request/response cycle (multiple times)
        3. disconnect() → closes the line

    Example:
        >>> transport = SerialTransport("/dev/ttyUSB0")
        >>> await transport.connect()
        >>> response = await transport.send(frame_bytes)
        >>> await transport.disconnect()
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying line.

        Raises:
            ModbusTransportError: If the line cannot be opened
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the underlying line.

        Must be idempotent. After disconnect, is_connected returns False.
        """

    @abstractmethod
    async def send(self, data: bytes) -> bytes:
        """Send one complete frame and return the reply frame.

        Args:
            data: Request frame, CRC included

        Returns:
            Reply frame bytes, CRC included, not yet validated

        Raises:
            ModbusQueueTimeout: If no transport slot was free in time
            ModbusResponseTimeout: If the slave did not answer in time
            ModbusTransportError: If not connected or the line failed
        """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the line is open."""
