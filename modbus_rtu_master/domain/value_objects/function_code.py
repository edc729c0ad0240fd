"""Modbus function codes."""

from enum import IntEnum


class FunctionCode(IntEnum):
    """Modbus function codes from the published protocol table.

    The master issues only READ_HOLDING_REGISTERS, WRITE_SINGLE_REGISTER
    and WRITE_MULTIPLE_REGISTERS.
    """

    READ_COILS = 0x01
    READ_DISCRETE_INPUTS = 0x02
    READ_HOLDING_REGISTERS = 0x03
    READ_INPUT_REGISTERS = 0x04
    WRITE_SINGLE_COIL = 0x05
    WRITE_SINGLE_REGISTER = 0x06
    WRITE_MULTIPLE_COILS = 0x0F
    WRITE_MULTIPLE_REGISTERS = 0x10
