"""Modbus response payload decoder.

Read responses have the layout::

    [Slave][Func][ByteCount][Data...][CRC_L][CRC_H]

The decoder works on frames whose CRC has already been validated.
"""

import logging
from typing import Any, List

from ...const import CRC_SIZE, READ_RESPONSE_HEADER_SIZE
from ...domain.exceptions import ModbusDecodeError
from ...domain.strategies import CodecFactory
from ...domain.value_objects import DataType, ReadFormat

_LOGGER = logging.getLogger(__name__)


class ResponseDecoder:
    """Extracts and reinterprets read-response payloads.

    Example:
        >>> decoder = ResponseDecoder()
        >>> decoder.parse_registers(b"\\x00\\x0a\\x00\\x14", DataType.UINT16)
        [10, 20]
    """

    def get_data_payload(self, frame: bytes) -> bytes:
        """Strip the response header and CRC trailer.

        Args:
            frame: CRC-validated read response frame

        Returns:
            Data payload bytes

        Raises:
            ModbusDecodeError: If the byte-count field disagrees with the frame
        """
        if len(frame) < READ_RESPONSE_HEADER_SIZE + CRC_SIZE:
            raise ModbusDecodeError(
                f"Response too short: {len(frame)} bytes", payload=bytes(frame)
            )

        byte_count = frame[2]
        payload = bytes(frame[READ_RESPONSE_HEADER_SIZE:-CRC_SIZE])

        if byte_count != len(payload):
            raise ModbusDecodeError(
                f"Byte count {byte_count} does not match payload length "
                f"{len(payload)}",
                payload=payload,
            )

        return payload

    def parse_registers(self, payload: bytes, data_type: DataType) -> List[Any]:
        """Reassemble register words into values of ``data_type``.

        Args:
            payload: Data payload, 2 bytes per register, big-endian words
            data_type: How to interpret consecutive words

        Returns:
            Decoded values in register order

        Raises:
            ModbusDecodeError: If the payload length does not fit the type width
        """
        width = data_type.width
        if len(payload) % width:
            raise ModbusDecodeError(
                f"Payload of {len(payload)} bytes is not a multiple of "
                f"{width} bytes required by {data_type.value}",
                payload=bytes(payload),
            )

        codec = CodecFactory.get_codec(data_type)
        values = [
            codec.decode(payload[offset : offset + width])
            for offset in range(0, len(payload), width)
        ]

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Decoded %d %s values: %s", len(values), data_type.value, values
            )

        return values

    def decode(self, payload: bytes, read_format: ReadFormat) -> Any:
        """Interpret ``payload`` per ``read_format``.

        ``DecodeAs`` goes through :meth:`parse_registers`; ``Transform``
        receives the raw payload unmodified.
        """
        return read_format.apply(payload, self)
