"""Test doubles for the Modbus master.

Example:
    >>> from tests.doubles import FakeTransport
    >>> transport = FakeTransport(connected=True)
    >>> transport.add_echo()
"""

from .fake_serial import FakeSerial
from .fake_transport import FakeTransport

__all__ = [
    "FakeSerial",
    "FakeTransport",
]
