"""Domain interfaces.

Abstract base classes the infrastructure layer implements and the
application layer depends on.
"""

from .i_crc import ICRC
from .i_transport import ITransport

__all__ = [
    "ICRC",
    "ITransport",
]
