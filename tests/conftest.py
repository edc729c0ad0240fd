"""Pytest configuration and fixtures for Modbus master tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so tests run from a plain checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from modbus_rtu_master.infrastructure.protocol import (
    FrameCodec,
    ModbusCRC16,
    ResponseDecoder,
)
from tests.doubles import FakeTransport


@pytest.fixture
def crc():
    """Create CRC calculator."""
    return ModbusCRC16()


@pytest.fixture
def codec(crc):
    """Create frame codec."""
    return FrameCodec(crc)


@pytest.fixture
def decoder():
    """Create response decoder."""
    return ResponseDecoder()


@pytest.fixture
def transport():
    """Connected fake transport."""
    return FakeTransport(connected=True)


@pytest.fixture
def read_response(codec):
    """Build a valid read holding registers response frame."""

    def _build(payload: bytes, slave: int = 1) -> bytes:
        return codec.add_crc(bytes([slave, 0x03, len(payload)]) + payload)

    return _build


@pytest.fixture
def exception_response(codec):
    """Build a valid exception response frame."""

    def _build(function: int, code: int, slave: int = 1) -> bytes:
        return codec.add_crc(bytes([slave, function | 0x80, code]))

    return _build
