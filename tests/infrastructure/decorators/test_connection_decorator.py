"""Tests for connection decorator."""

import logging

import pytest

from modbus_rtu_master.domain.exceptions import ModbusTransportError
from modbus_rtu_master.infrastructure.decorators.connection_decorator import (
    require_connection,
)


class Line:
    """Minimal object exposing is_connected."""

    def __init__(self, connected: bool):
        self.is_connected = connected
        self.calls = 0

    @require_connection
    async def send(self, data: bytes) -> bytes:
        self.calls += 1
        return data


class TestRequireConnection:
    """Test connection decorator."""

    @pytest.mark.asyncio
    async def test_connected_calls_through(self):
        line = Line(connected=True)

        assert await line.send(b"\x01") == b"\x01"
        assert line.calls == 1

    @pytest.mark.asyncio
    async def test_not_connected_raises_error(self, caplog):
        line = Line(connected=False)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ModbusTransportError, match="not connected"):
                await line.send(b"\x01")

        assert line.calls == 0
        assert "Line.send called while not connected" in caplog.text

    def test_preserves_metadata(self):
        assert Line.send.__name__ == "send"
