"""Application use cases, one per public register operation."""

from .read_holding_registers_use_case import ReadHoldingRegistersUseCase
from .write_single_register_use_case import WriteSingleRegisterUseCase
from .write_multiple_registers_use_case import WriteMultipleRegistersUseCase

__all__ = [
    "ReadHoldingRegistersUseCase",
    "WriteSingleRegisterUseCase",
    "WriteMultipleRegistersUseCase",
]
