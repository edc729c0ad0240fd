"""Register word codecs using the Strategy pattern.

Each codec turns a run of big-endian register words into one value.
32-bit values use the high word first.
"""

import struct
from abc import ABC, abstractmethod
from typing import Any

from ..value_objects.data_type import DataType


class RegisterCodecStrategy(ABC):
    """Abstract strategy for decoding register words."""

    @abstractmethod
    def decode(self, chunk: bytes) -> Any:
        """Decode one value from ``chunk`` (exactly ``DataType.width`` bytes)."""


class StructCodec(RegisterCodecStrategy):
    """Codec backed by a single ``struct`` format."""

    def __init__(self, fmt: str):
        self._fmt = fmt

    def decode(self, chunk: bytes) -> Any:
        return struct.unpack(self._fmt, chunk)[0]


class AsciiCodec(RegisterCodecStrategy):
    """Two ASCII characters per register, high byte first."""

    def decode(self, chunk: bytes) -> str:
        return chunk.decode("ascii", errors="replace")


class RawCodec(RegisterCodecStrategy):
    """Register bytes passed through untouched."""

    def decode(self, chunk: bytes) -> bytes:
        return bytes(chunk)


class CodecFactory:
    """Factory for the codec of a data type."""

    _codecs = {
        DataType.UINT16: StructCodec(">H"),
        DataType.INT16: StructCodec(">h"),
        DataType.UINT32: StructCodec(">I"),
        DataType.INT32: StructCodec(">i"),
        DataType.FLOAT32: StructCodec(">f"),
        DataType.ASCII: AsciiCodec(),
        DataType.RAW: RawCodec(),
    }

    @classmethod
    def get_codec(cls, data_type: DataType) -> RegisterCodecStrategy:
        """Get codec for data type.

        Raises:
            ValueError: If data type unknown

        Example:
            >>> codec = CodecFactory.get_codec(DataType.INT16)
            >>> codec.decode(b"\\xff\\xec")
            -20
        """
        codec = cls._codecs.get(data_type)
        if codec is None:
            raise ValueError(f"Unknown data type: {data_type}")
        return codec
