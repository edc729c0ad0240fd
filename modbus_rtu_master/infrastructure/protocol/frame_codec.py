"""Modbus RTU frame codec.

Builds request frames and appends/validates the CRC trailer.

Frame layouts (all fields big-endian except the CRC)::

    Fixed:    [Slave][Func][Field1_H][Field1_L][Field2_H][Field2_L]
    Variable: [Slave][Func][Start_H][Start_L][Count_H][Count_L][ByteCount][Values...]
    Trailer:  [...][CRC_L][CRC_H]
"""

import logging
import struct
from typing import Optional, Sequence

from ...const import (
    CRC_SIZE,
    EXCEPTION_FLAG,
    EXCEPTION_RESPONSE_SIZE,
    MAX_REGISTER,
    MIN_REGISTER,
    READ_RESPONSE_HEADER_SIZE,
    REGISTER_SIZE,
    WRITE_RESPONSE_SIZE,
)
from ...domain.exceptions import ModbusCrcError
from ...domain.interfaces import ICRC
from ...domain.value_objects import FunctionCode
from .modbus_crc16 import ModbusCRC16

_LOGGER = logging.getLogger(__name__)

# Function codes whose normal reply carries a byte-count field
_BYTE_COUNT_REPLIES = (
    FunctionCode.READ_COILS,
    FunctionCode.READ_DISCRETE_INPUTS,
    FunctionCode.READ_HOLDING_REGISTERS,
    FunctionCode.READ_INPUT_REGISTERS,
)

# Function codes whose normal reply is an 8-byte echo
_ECHO_REPLIES = (
    FunctionCode.WRITE_SINGLE_COIL,
    FunctionCode.WRITE_SINGLE_REGISTER,
    FunctionCode.WRITE_MULTIPLE_COILS,
    FunctionCode.WRITE_MULTIPLE_REGISTERS,
)


class FrameCodec:
    """Builds Modbus RTU frames and handles the CRC trailer.

    The codec holds no mutable state: building and validating the same
    frame any number of times gives the same result.

    Example:
        >>> codec = FrameCodec()
        >>> header = codec.build_fixed_packet(5, FunctionCode.READ_HOLDING_REGISTERS, 10, 2)
        >>> header.hex()
        '0503000a0002'
        >>> frame = codec.add_crc(header)
        >>> codec.check_crc(frame)
        True
    """

    def __init__(self, crc: Optional[ICRC] = None):
        self._crc = crc or ModbusCRC16()

    def build_fixed_packet(
        self, slave: int, function: int, field1: int, field2: int
    ) -> bytes:
        """Build a fixed-length request header.

        Used by read holding registers (start, length) and write single
        register (register, value).

        Args:
            slave: Slave address (0-255)
            function: Function code
            field1: First 16-bit field
            field2: Second 16-bit field

        Returns:
            Six header bytes, without CRC

        Raises:
            ValueError: If a value does not fit its field
        """
        _check_byte("Slave address", slave)
        _check_byte("Function code", function)
        _check_word("Field 1", field1)
        _check_word("Field 2", field2)

        return struct.pack(">BBHH", slave, function, field1, field2)

    def build_variable_packet(
        self, slave: int, function: int, start: int, values: Sequence[int]
    ) -> bytes:
        """Build a variable-length request header (write multiple registers).

        The 123-register protocol limit is not enforced here.

        Args:
            slave: Slave address (0-255)
            function: Function code
            start: First register address
            values: Register values in order

        Returns:
            Header and values, without CRC

        Raises:
            ValueError: If a value does not fit its field
        """
        _check_byte("Slave address", slave)
        _check_byte("Function code", function)
        _check_word("Start address", start)
        for value in values:
            _check_word("Register value", value)

        count = len(values)
        _check_word("Register count", count)
        _check_byte("Byte count", count * REGISTER_SIZE)

        header = struct.pack(
            ">BBHHB", slave, function, start, count, count * REGISTER_SIZE
        )
        return header + struct.pack(f">{count}H", *values)

    def add_crc(self, frame: bytes) -> bytes:
        """Return ``frame`` with its CRC appended (little-endian)."""
        return bytes(frame) + struct.pack("<H", self._crc.calculate(bytes(frame)))

    def check_crc(self, frame: bytes) -> bool:
        """Return True if the last two bytes are the CRC of the rest."""
        if len(frame) <= CRC_SIZE:
            return False

        received_crc = struct.unpack("<H", frame[-CRC_SIZE:])[0]
        return self._crc.validate(bytes(frame[:-CRC_SIZE]), received_crc)

    def validate_crc(self, frame: bytes) -> None:
        """Validate the CRC trailer.

        Raises:
            ModbusCrcError: If the frame is too short or the CRC disagrees
        """
        if len(frame) <= CRC_SIZE:
            raise ModbusCrcError(
                f"Frame too short to carry a CRC: {len(frame)} bytes"
            )

        if not self.check_crc(frame):
            received_crc = struct.unpack("<H", frame[-CRC_SIZE:])[0]
            calculated_crc = self._crc.calculate(bytes(frame[:-CRC_SIZE]))
            _LOGGER.warning(
                "CRC mismatch: received=0x%04X, calculated=0x%04X",
                received_crc,
                calculated_crc,
            )
            raise ModbusCrcError(
                f"CRC mismatch: received=0x{received_crc:04X}, "
                f"calculated=0x{calculated_crc:04X}"
            )

    @staticmethod
    def expected_response_length(buffer: bytes) -> Optional[int]:
        """Length of the reply frame that starts with ``buffer``.

        RTU frames carry no length prefix, so the length follows from the
        function code (and, for reads, the byte-count field).

        Args:
            buffer: Reply bytes received so far

        Returns:
            Total frame length including CRC, or None while not yet known
        """
        if len(buffer) < 2:
            return None

        function = buffer[1]
        if function & EXCEPTION_FLAG:
            return EXCEPTION_RESPONSE_SIZE

        if function in _BYTE_COUNT_REPLIES:
            if len(buffer) < READ_RESPONSE_HEADER_SIZE:
                return None
            return READ_RESPONSE_HEADER_SIZE + buffer[2] + CRC_SIZE

        if function in _ECHO_REPLIES:
            return WRITE_RESPONSE_SIZE

        # Unknown function: read until the line goes quiet
        return None


def _check_byte(name: str, value: int) -> None:
    if not 0x00 <= value <= 0xFF:
        raise ValueError(f"{name} must be 0-255, got {value}")


def _check_word(name: str, value: int) -> None:
    if not MIN_REGISTER <= value <= MAX_REGISTER:
        raise ValueError(f"{name} must be 0-65535, got {value}")

