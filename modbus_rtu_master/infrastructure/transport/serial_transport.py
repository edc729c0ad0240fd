"""Serial transport implementation for Modbus RTU.

This module implements the ITransport interface on top of pyserial.
One asyncio.Lock serializes transactions on the half-duplex line; the
lock is FIFO fair, so queued requests go out in the order they arrived.
Blocking port I/O runs in the event loop's default executor. A cancelled
send keeps the lock until its executor exchange has returned.
"""

import asyncio
import contextlib
import logging
import time
from typing import Any, Mapping, Optional

import serial
from serial import SerialException

from ...const import (
    BAUDRATE,
    BYTESIZE,
    CONF_BAUDRATE,
    CONF_BYTESIZE,
    CONF_INTER_FRAME_DELAY,
    CONF_PARITY,
    CONF_PORT,
    CONF_QUEUE_TIMEOUT,
    CONF_RESPONSE_TIMEOUT,
    CONF_STOPBITS,
    INTER_FRAME_DELAY,
    PARITY,
    QUEUE_TIMEOUT,
    READ_RESPONSE_HEADER_SIZE,
    RESPONSE_TIMEOUT,
    SERIAL_POLL_INTERVAL,
    STOPBITS,
)
from ...domain.exceptions import (
    ModbusQueueTimeout,
    ModbusResponseTimeout,
    ModbusTransportError,
)
from ...domain.interfaces import ITransport
from ..decorators import handle_transport_errors, require_connection
from ..protocol import FrameCodec

_LOGGER = logging.getLogger(__name__)


class SerialTransport(ITransport):
    """Serial line transport for Modbus RTU.

    This implementation handles:
    - Opening/closing the port via pyserial
    - FIFO serialization of request/response cycles
    - Queue timeout (waiting for a free slot)
    - Response timeout (waiting for the slave)
    - Silent interval between consecutive frames
    - Reply framing from the function code and byte count

    Attributes:
        port: Serial device name, e.g. "/dev/ttyUSB0" or "COM3"

    Example:
        >>> transport = SerialTransport("/dev/ttyUSB0", baudrate=19200)
        >>> await transport.connect()
        >>> response = await transport.send(frame)
        >>> await transport.disconnect()
    """

    def __init__(
        self,
        port: str,
        *,
        baudrate: int = BAUDRATE,
        bytesize: int = BYTESIZE,
        parity: str = PARITY,
        stopbits: float = STOPBITS,
        response_timeout: float = RESPONSE_TIMEOUT,
        queue_timeout: float = QUEUE_TIMEOUT,
        inter_frame_delay: float = INTER_FRAME_DELAY,
        codec: Optional[FrameCodec] = None,
    ):
        self.port = port
        self._baudrate = baudrate
        self._bytesize = bytesize
        self._parity = parity
        self._stopbits = stopbits
        self._response_timeout = response_timeout
        self._queue_timeout = queue_timeout
        self._inter_frame_delay = inter_frame_delay
        self._codec = codec or FrameCodec()
        self._serial: Optional[serial.Serial] = None
        self._lock = asyncio.Lock()
        self._last_frame_time = 0.0

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SerialTransport":
        """Create a transport from validated master options.

        Raises:
            ValueError: If no port is configured
        """
        port = options.get(CONF_PORT)
        if not port:
            raise ValueError("Serial transport requires a 'port' option")

        return cls(
            port,
            baudrate=options.get(CONF_BAUDRATE, BAUDRATE),
            bytesize=options.get(CONF_BYTESIZE, BYTESIZE),
            parity=options.get(CONF_PARITY, PARITY),
            stopbits=options.get(CONF_STOPBITS, STOPBITS),
            response_timeout=options.get(CONF_RESPONSE_TIMEOUT, RESPONSE_TIMEOUT),
            queue_timeout=options.get(CONF_QUEUE_TIMEOUT, QUEUE_TIMEOUT),
            inter_frame_delay=options.get(CONF_INTER_FRAME_DELAY, INTER_FRAME_DELAY),
        )

    async def connect(self) -> None:
        """Open the serial port.

        Raises:
            ModbusTransportError: If the port cannot be opened
        """
        if self.is_connected:
            return

        loop = asyncio.get_running_loop()
        try:
            self._serial = await loop.run_in_executor(None, self._open_port)
        except (SerialException, ValueError) as err:
            _LOGGER.error("Failed to open serial port %s: %s", self.port, err)
            raise ModbusTransportError(
                f"Failed to open serial port {self.port}: {err}"
            ) from err

        _LOGGER.info(
            "Serial transport connected to %s (%d %d%s%s)",
            self.port,
            self._baudrate,
            self._bytesize,
            self._parity,
            self._stopbits,
        )

    async def disconnect(self) -> None:
        """Close the serial port. Safe to call more than once."""
        if self._serial is None:
            return

        try:
            self._serial.close()
            _LOGGER.debug("Serial port %s closed", self.port)
        except SerialException as err:
            _LOGGER.warning("Error during disconnect: %s", err)
        finally:
            self._serial = None

    @property
    def is_connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    @handle_transport_errors("Serial send", reraise=True)
    @require_connection
    async def send(self, data: bytes) -> bytes:
        """Send one frame and wait for the reply frame.

        Args:
            data: Request frame with CRC

        Returns:
            Reply frame bytes with CRC (not validated here)

        Raises:
            ModbusQueueTimeout: If the line stayed busy for queue_timeout
            ModbusResponseTimeout: If no complete reply within response_timeout
            ModbusTransportError: If not connected
            SerialException: If the port fails during the exchange
        """
        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=self._queue_timeout)
        except asyncio.TimeoutError as err:
            raise ModbusQueueTimeout(
                f"No free transport slot within {self._queue_timeout}s"
            ) from err

        try:
            await self._wait_inter_frame_delay()

            if _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug(
                    "Sending %d bytes to %s: %s", len(data), self.port, data.hex()
                )

            loop = asyncio.get_running_loop()
            exchange = loop.run_in_executor(None, self._exchange, bytes(data))
            try:
                response = await asyncio.shield(exchange)
            except asyncio.CancelledError:
                # The thread keeps the port until it returns; hold the lock until then
                with contextlib.suppress(Exception):
                    await exchange
                _LOGGER.debug(
                    "Send to %s cancelled, exchange finished first", self.port
                )
                raise

            if _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug(
                    "Received %d bytes from %s: %s",
                    len(response),
                    self.port,
                    response.hex(),
                )

            return response
        finally:
            self._last_frame_time = time.monotonic()
            self._lock.release()

    def _open_port(self) -> serial.Serial:
        return serial.Serial(
            port=self.port,
            baudrate=self._baudrate,
            bytesize=self._bytesize,
            parity=self._parity,
            stopbits=self._stopbits,
            timeout=0,
        )

    async def _wait_inter_frame_delay(self) -> None:
        elapsed = time.monotonic() - self._last_frame_time
        if elapsed < self._inter_frame_delay:
            await asyncio.sleep(self._inter_frame_delay - elapsed)

    def _exchange(self, data: bytes) -> bytes:
        """Write ``data`` and collect one reply frame (runs in executor)."""
        port = self._serial
        # Drop stale bytes from an earlier, timed-out reply
        port.reset_input_buffer()
        port.write(data)
        port.flush()

        deadline = time.monotonic() + self._response_timeout
        buffer = bytearray()
        expected: Optional[int] = None

        while True:
            waiting = port.in_waiting
            if waiting:
                buffer.extend(port.read(waiting))
                expected = self._codec.expected_response_length(buffer)
                if expected is not None and len(buffer) >= expected:
                    return bytes(buffer[:expected])

            if time.monotonic() >= deadline:
                break
            time.sleep(SERIAL_POLL_INTERVAL)

        if len(buffer) >= READ_RESPONSE_HEADER_SIZE and expected is None:
            # Unknown function code, reply length not derivable from the header
            return bytes(buffer)

        raise ModbusResponseTimeout(
            f"No complete response from {self.port} within "
            f"{self._response_timeout}s ({len(buffer)} bytes received)"
        )
