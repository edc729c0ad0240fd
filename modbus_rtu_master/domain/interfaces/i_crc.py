"""ICRC interface for frame checksums."""

from abc import ABC, abstractmethod


class ICRC(ABC):
    """Checksum used to guard RTU frames against line noise.

    Implemented by ModbusCRC16; FrameCodec accepts any implementation.
    """

    @abstractmethod
    def calculate(self, data: bytes) -> int:
        """Checksum of ``data`` as an unsigned 16-bit integer.

        Raises:
            ValueError: If data is None
        """

    @abstractmethod
    def validate(self, data: bytes, expected_crc: int) -> bool:
        """Return True if ``data`` hashes to ``expected_crc``."""
