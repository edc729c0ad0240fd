"""Modbus RTU protocol implementation.

This module contains the CRC, frame building and response decoding
pieces the application services are assembled from.
"""

from .modbus_crc16 import ModbusCRC16
from .frame_codec import FrameCodec
from .response_decoder import ResponseDecoder

__all__ = [
    "ModbusCRC16",
    "FrameCodec",
    "ResponseDecoder",
]
