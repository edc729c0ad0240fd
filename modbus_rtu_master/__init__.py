"""Modbus RTU master for holding registers over a serial line."""

from .config_loader import load_options_file, validate_options
from .domain.exceptions import (
    ModbusCrcError,
    ModbusDecodeError,
    ModbusError,
    ModbusQueueTimeout,
    ModbusResponseTimeout,
    ModbusRetryLimitExceeded,
    ModbusSlaveError,
    ModbusTimeoutError,
    ModbusTransportError,
)
from .domain.value_objects import (
    DataType,
    DecodeAs,
    ExceptionCode,
    FunctionCode,
    Transform,
)
from .infrastructure.transport import SerialTransport
from .master import ModbusMaster

__version__ = "1.0.0"

__all__ = [
    "DataType",
    "DecodeAs",
    "ExceptionCode",
    "FunctionCode",
    "ModbusCrcError",
    "ModbusDecodeError",
    "ModbusError",
    "ModbusMaster",
    "ModbusQueueTimeout",
    "ModbusResponseTimeout",
    "ModbusRetryLimitExceeded",
    "ModbusSlaveError",
    "ModbusTimeoutError",
    "ModbusTransportError",
    "SerialTransport",
    "Transform",
    "load_options_file",
    "validate_options",
]
