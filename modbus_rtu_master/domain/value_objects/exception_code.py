"""Modbus exception codes."""

from enum import IntEnum
from typing import Union


class ExceptionCode(IntEnum):
    """Standard Modbus exception codes carried by exception responses."""

    ILLEGAL_FUNCTION = 0x01
    ILLEGAL_DATA_ADDRESS = 0x02
    ILLEGAL_DATA_VALUE = 0x03
    SLAVE_DEVICE_FAILURE = 0x04
    ACKNOWLEDGE = 0x05
    SLAVE_DEVICE_BUSY = 0x06
    MEMORY_PARITY_ERROR = 0x08
    GATEWAY_PATH_UNAVAILABLE = 0x0A
    GATEWAY_TARGET_NO_RESPONSE = 0x0B

    @property
    def description(self) -> str:
        """Readable form of the name, e.g. "Illegal data address"."""
        return self.name.replace("_", " ").capitalize()

    @classmethod
    def from_wire(cls, code: int) -> Union["ExceptionCode", int]:
        """Map a received code to the enum; codes outside the table stay ints."""
        try:
            return cls(code)
        except ValueError:
            return code


def format_modbus_error(error_code: int) -> str:
    """Format a Modbus exception code for log and error messages.

    Args:
        error_code: Exception code returned by the slave

    Returns:
        Formatted string such as ``"0x02 (Illegal data address)"``
    """
    code = ExceptionCode.from_wire(error_code)
    if isinstance(code, ExceptionCode):
        description = code.description
    else:
        description = "Unknown error"
    return f"0x{int(error_code):02X} ({description})"
