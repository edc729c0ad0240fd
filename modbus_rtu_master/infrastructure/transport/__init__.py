"""Transport implementations.

This module contains implementations of the ITransport interface for
the physical lines a Modbus RTU master talks over.
"""

from .serial_transport import SerialTransport

__all__ = [
    "SerialTransport",
]
