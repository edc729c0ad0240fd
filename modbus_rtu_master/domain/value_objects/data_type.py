"""Register data types."""

from enum import Enum


class DataType(Enum):
    """How consecutive 16-bit register words are reassembled.

    The value is the data type name; ``width`` is the number of payload
    bytes one decoded value consumes (2 bytes per register).
    """

    UINT16 = "uint16"
    INT16 = "int16"
    UINT32 = "uint32"
    INT32 = "int32"
    FLOAT32 = "float32"
    ASCII = "ascii"
    RAW = "raw"

    @property
    def width(self) -> int:
        """Bytes consumed per decoded value."""
        if self in (DataType.UINT32, DataType.INT32, DataType.FLOAT32):
            return 4
        return 2

    @property
    def register_count(self) -> int:
        """Registers consumed per decoded value."""
        return self.width // 2
