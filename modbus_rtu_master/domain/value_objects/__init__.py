"""Value objects of the Modbus master domain.

Immutable primitives: wire-level enumerations and the read-format
variant used by the read path.
"""

from .function_code import FunctionCode
from .exception_code import ExceptionCode
from .data_type import DataType
from .read_format import DecodeAs, ReadFormat, Transform, as_read_format

__all__ = [
    "FunctionCode",
    "ExceptionCode",
    "DataType",
    "DecodeAs",
    "ReadFormat",
    "Transform",
    "as_read_format",
]
