"""ReadFormat variant for the read path.

A read either decodes the payload by :class:`DataType` or hands the raw
payload to a caller-supplied function. Both forms expose ``apply()`` so
the decoder never inspects which one it got.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from .data_type import DataType


@dataclass(frozen=True)
class DecodeAs:
    """Decode the payload as a sequence of ``data_type`` values."""

    data_type: DataType

    def apply(self, payload: bytes, decoder) -> Any:
        return decoder.parse_registers(payload, self.data_type)


@dataclass(frozen=True)
class Transform:
    """Pass the raw payload, unmodified, to ``func`` and return its result.

    Example:
        >>> fmt = Transform(lambda payload: payload.hex())
        >>> await master.read_holding_registers(1, 0, 2, fmt)
        '000a0014'
    """

    func: Callable[[bytes], Any]

    def apply(self, payload: bytes, decoder) -> Any:
        return self.func(payload)


ReadFormat = Union[DecodeAs, Transform]


def as_read_format(value: Union[ReadFormat, DataType, None]) -> ReadFormat:
    """Normalize the read-format argument of the public surface.

    ``None`` means unsigned 16-bit, a bare :class:`DataType` is wrapped in
    :class:`DecodeAs`. Custom functions must be wrapped in :class:`Transform`.

    Raises:
        TypeError: If value is neither a DataType nor a ReadFormat
    """
    if value is None:
        return DecodeAs(DataType.UINT16)
    if isinstance(value, DataType):
        return DecodeAs(value)
    if isinstance(value, (DecodeAs, Transform)):
        return value
    raise TypeError(
        f"Read format must be DataType, DecodeAs or Transform, "
        f"got {type(value).__name__}"
    )
