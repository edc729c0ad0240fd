"""Tests for the transport error handling decorator."""

import asyncio
import logging

import pytest
from serial import SerialException

from modbus_rtu_master.domain.exceptions import (
    ModbusCrcError,
    ModbusQueueTimeout,
    ModbusSlaveError,
)
from modbus_rtu_master.infrastructure.decorators.error_handler import (
    handle_transport_errors,
)


class TestHandleTransportErrors:
    """Test logging and re-raising of transport failures."""

    @pytest.mark.asyncio
    async def test_successful_async_execution(self):
        """Return value passes through untouched."""

        @handle_transport_errors("Serial send")
        async def send():
            return "success"

        assert await send() == "success"

    @pytest.mark.asyncio
    async def test_timeout_error_reraise(self):
        """Timeouts propagate by default."""

        @handle_transport_errors("Serial send", reraise=True)
        async def send():
            raise asyncio.TimeoutError("no slot")

        with pytest.raises(asyncio.TimeoutError):
            await send()

    @pytest.mark.asyncio
    async def test_timeout_error_no_reraise(self):
        """Swallowed timeouts yield the default value."""

        @handle_transport_errors(
            "Serial send", reraise=False, default_return="default"
        )
        async def send():
            raise asyncio.TimeoutError("no slot")

        assert await send() == "default"

    @pytest.mark.asyncio
    async def test_modbus_timeout_logged_as_warning(self, caplog):
        """Queue and response timeouts are TimeoutError subclasses."""

        @handle_transport_errors("Serial send")
        async def send():
            raise ModbusQueueTimeout("line busy")

        with caplog.at_level(logging.WARNING):
            with pytest.raises(ModbusQueueTimeout):
                await send()

        assert "Serial send timed out: line busy" in caplog.text
        assert caplog.records[-1].levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_protocol_error_logged_without_traceback(self, caplog):
        @handle_transport_errors("Serial send", reraise=False)
        async def send():
            raise ModbusCrcError("CRC mismatch")

        with caplog.at_level(logging.ERROR):
            await send()

        assert "Serial send protocol error: CRC mismatch" in caplog.text
        assert not caplog.records[-1].exc_info

    @pytest.mark.asyncio
    async def test_slave_error_logged_as_warning(self, caplog):
        @handle_transport_errors("Serial send")
        async def send():
            raise ModbusSlaveError(0x06, 0x02)

        with caplog.at_level(logging.WARNING):
            with pytest.raises(ModbusSlaveError):
                await send()

        assert "Serial send rejected by slave" in caplog.text
        assert caplog.records[-1].levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_serial_error_logged(self, caplog):
        @handle_transport_errors("Serial send")
        async def send():
            raise SerialException("device disconnected")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(SerialException):
                await send()

        assert "Serial send serial error: device disconnected" in caplog.text

    @pytest.mark.asyncio
    async def test_generic_exception_logged(self, caplog):
        """Unexpected exceptions are logged with traceback."""

        @handle_transport_errors("Serial send", reraise=False)
        async def send():
            raise ValueError("bad frame length")

        with caplog.at_level(logging.ERROR):
            await send()

        assert "Serial send unexpected error" in caplog.text
        assert "bad frame length" in caplog.text
        assert caplog.records[-1].exc_info

    def test_sync_function_support(self):
        """Plain functions are wrapped too."""

        @handle_transport_errors("Options load", reraise=False, default_return=42)
        def load():
            raise ValueError("malformed options")

        assert load() == 42

    @pytest.mark.asyncio
    async def test_custom_logger(self, caplog):
        """An explicit logger replaces the module logger."""
        custom_logger = logging.getLogger("modbus.audit")

        @handle_transport_errors("Register write", logger=custom_logger, reraise=False)
        async def send():
            raise KeyError("register")

        with caplog.at_level(logging.ERROR):
            await send()

        assert caplog.records[-1].name == "modbus.audit"

    def test_preserves_metadata(self):
        @handle_transport_errors("Register write")
        async def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
