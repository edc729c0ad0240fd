"""Tests for SerialTransport."""

import asyncio

import pytest
import serial
from serial import SerialException

from modbus_rtu_master.const import CONF_PORT, CONF_RESPONSE_TIMEOUT
from modbus_rtu_master.domain.exceptions import (
    ModbusQueueTimeout,
    ModbusResponseTimeout,
    ModbusTransportError,
)
from modbus_rtu_master.infrastructure.transport import SerialTransport
from tests.doubles import FakeSerial

WRITE_REQUEST = bytes([0x01, 0x06, 0x00, 0x10, 0x01, 0x2C, 0x88, 0x7B])


def make_transport(port: FakeSerial, **kwargs) -> SerialTransport:
    """Transport wired to an already open fake port."""
    kwargs.setdefault("response_timeout", 0.1)
    kwargs.setdefault("queue_timeout", 1.0)
    kwargs.setdefault("inter_frame_delay", 0.0)
    transport = SerialTransport("/dev/ttyTEST", **kwargs)
    transport._serial = port
    return transport


def echo(data: bytes) -> bytes:
    return data


class TestConnection:
    """Test port lifecycle."""

    @pytest.mark.asyncio
    async def test_connect_opens_port(self, monkeypatch):
        opened = {}
        port = FakeSerial()

        def fake_serial(**kwargs):
            opened.update(kwargs)
            return port

        monkeypatch.setattr(serial, "Serial", fake_serial)
        transport = SerialTransport("/dev/ttyTEST", baudrate=19200, parity="E")

        await transport.connect()

        assert transport.is_connected
        assert opened["port"] == "/dev/ttyTEST"
        assert opened["baudrate"] == 19200
        assert opened["parity"] == "E"
        assert opened["timeout"] == 0

    @pytest.mark.asyncio
    async def test_connect_failure_raises_transport_error(self, monkeypatch):
        def fake_serial(**kwargs):
            raise SerialException("could not open port")

        monkeypatch.setattr(serial, "Serial", fake_serial)
        transport = SerialTransport("/dev/ttyMISSING")

        with pytest.raises(ModbusTransportError, match="could not open port"):
            await transport.connect()

        assert not transport.is_connected

    @pytest.mark.asyncio
    async def test_disconnect_is_idempotent(self):
        port = FakeSerial()
        transport = make_transport(port)

        await transport.disconnect()
        await transport.disconnect()

        assert not port.is_open
        assert not transport.is_connected

    @pytest.mark.asyncio
    async def test_send_when_not_connected(self):
        transport = SerialTransport("/dev/ttyTEST")

        with pytest.raises(ModbusTransportError, match="not connected"):
            await transport.send(WRITE_REQUEST)

    def test_from_options(self):
        transport = SerialTransport.from_options(
            {CONF_PORT: "/dev/ttyUSB1", CONF_RESPONSE_TIMEOUT: 1.5}
        )

        assert transport.port == "/dev/ttyUSB1"
        assert transport._response_timeout == 1.5

    def test_from_options_without_port(self):
        with pytest.raises(ValueError, match="port"):
            SerialTransport.from_options({CONF_PORT: None})


class TestFraming:
    """Test reply collection."""

    @pytest.mark.asyncio
    async def test_write_echo(self):
        port = FakeSerial(replies=[echo])
        transport = make_transport(port)

        assert await transport.send(WRITE_REQUEST) == WRITE_REQUEST
        assert port.written == [WRITE_REQUEST]

    @pytest.mark.asyncio
    async def test_read_reply_in_chunks(self, read_response):
        reply = read_response(b"\x00\x0a\x00\x14\x00\x1e")
        transport = make_transport(FakeSerial(replies=[reply], chunk_size=1))

        assert await transport.send(b"\x01\x03\x00\x00\x00\x03\x05\xcb") == reply

    @pytest.mark.asyncio
    async def test_trailing_bytes_dropped(self, read_response):
        reply = read_response(b"\x00\x0a")
        transport = make_transport(FakeSerial(replies=[reply + b"\xff\xff"]))

        assert await transport.send(b"\x01\x03\x00\x00\x00\x01\x84\x0a") == reply

    @pytest.mark.asyncio
    async def test_exception_reply(self, exception_response):
        reply = exception_response(0x06, 0x02)
        transport = make_transport(FakeSerial(replies=[reply]))

        assert await transport.send(WRITE_REQUEST) == reply

    @pytest.mark.asyncio
    async def test_unknown_function_returns_what_arrived(self, codec):
        reply = codec.add_crc(b"\x01\x2b\x0e\x01")
        transport = make_transport(FakeSerial(replies=[reply]), response_timeout=0.05)

        assert await transport.send(b"\x01\x2b\x0e\x01\x00") == reply

    @pytest.mark.asyncio
    async def test_stale_input_discarded(self):
        port = FakeSerial(replies=[echo])
        port._pending.extend(b"\x01\x83\x02")
        transport = make_transport(port)

        assert await transport.send(WRITE_REQUEST) == WRITE_REQUEST


class TestTimeouts:
    """Test response and queue timeouts."""

    @pytest.mark.asyncio
    async def test_no_reply(self):
        transport = make_transport(FakeSerial(), response_timeout=0.05)

        with pytest.raises(ModbusResponseTimeout, match="0 bytes received"):
            await transport.send(WRITE_REQUEST)

    @pytest.mark.asyncio
    async def test_truncated_reply(self):
        transport = make_transport(
            FakeSerial(replies=[WRITE_REQUEST[:5]]), response_timeout=0.05
        )

        with pytest.raises(ModbusResponseTimeout, match="5 bytes received"):
            await transport.send(WRITE_REQUEST)

    @pytest.mark.asyncio
    async def test_response_timeout_is_timeout_error(self):
        transport = make_transport(FakeSerial(), response_timeout=0.05)

        with pytest.raises(TimeoutError):
            await transport.send(WRITE_REQUEST)

    @pytest.mark.asyncio
    async def test_queue_timeout(self):
        port = FakeSerial(replies=[echo, echo], delay=0.3)
        transport = make_transport(port, queue_timeout=0.05, response_timeout=0.5)

        first = asyncio.create_task(transport.send(WRITE_REQUEST))
        await asyncio.sleep(0.05)

        with pytest.raises(ModbusQueueTimeout):
            await transport.send(WRITE_REQUEST)

        assert await first == WRITE_REQUEST
        assert len(port.written) == 1

    @pytest.mark.asyncio
    async def test_lock_released_after_timeout(self):
        port = FakeSerial(replies=[b"", echo])
        transport = make_transport(port, response_timeout=0.05)

        with pytest.raises(ModbusResponseTimeout):
            await transport.send(WRITE_REQUEST)

        assert await transport.send(WRITE_REQUEST) == WRITE_REQUEST

    @pytest.mark.asyncio
    async def test_serial_error_propagates_and_releases_lock(self):
        port = FakeSerial(replies=[SerialException("device disconnected"), echo])
        transport = make_transport(port)

        with pytest.raises(SerialException):
            await transport.send(WRITE_REQUEST)

        assert await transport.send(WRITE_REQUEST) == WRITE_REQUEST


class TestSerialization:
    """Test one-at-a-time access to the line."""

    @pytest.mark.asyncio
    async def test_fifo_order(self, codec):
        frames = [
            codec.add_crc(codec.build_fixed_packet(1, 0x06, register, register))
            for register in range(5)
        ]
        port = FakeSerial(replies=[echo] * len(frames), delay=0.01)
        transport = make_transport(port)

        results = await asyncio.gather(*(transport.send(f) for f in frames))

        assert port.written == frames
        assert results == frames

    @pytest.mark.asyncio
    async def test_inter_frame_delay(self):
        port = FakeSerial(replies=[echo, echo])
        transport = make_transport(port, inter_frame_delay=0.1)

        await transport.send(WRITE_REQUEST)
        await transport.send(WRITE_REQUEST)

        assert port.write_times[1] - port.write_times[0] >= 0.09

    @pytest.mark.asyncio
    async def test_cancelled_send_keeps_line_until_exchange_ends(self):
        port = FakeSerial(replies=[echo, echo], delay=0.3)
        transport = make_transport(port, response_timeout=0.5)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(transport.send(WRITE_REQUEST), 0.05)

        assert await transport.send(WRITE_REQUEST) == WRITE_REQUEST
        assert port.max_active_writes == 1
        assert len(port.written) == 2
        assert port.write_times[1] - port.write_times[0] >= 0.29
