"""Constants for the Modbus RTU master.

Timing values are in seconds.
"""

from __future__ import annotations

# Exception responses have this bit set in the function code
EXCEPTION_FLAG = 0x80

# Frame geometry
CRC_SIZE = 2
REGISTER_SIZE = 2
READ_RESPONSE_HEADER_SIZE = 3  # slave + function + byte count
WRITE_RESPONSE_SIZE = 8  # echo: slave + function + 2 fields + crc
EXCEPTION_RESPONSE_SIZE = 5  # slave + function|0x80 + code + crc

MIN_REGISTER = 0x0000
MAX_REGISTER = 0xFFFF

# Default options
RESPONSE_TIMEOUT = 0.5
QUEUE_TIMEOUT = 5.0
INTER_FRAME_DELAY = 0.05
DEFAULT_RETRY_COUNT = 10

# Serial port settings
BAUDRATE = 9600
BYTESIZE = 8
PARITY = "N"
STOPBITS = 1
SERIAL_POLL_INTERVAL = 0.005

CONF_RESPONSE_TIMEOUT = "response_timeout"
CONF_QUEUE_TIMEOUT = "queue_timeout"
CONF_INTER_FRAME_DELAY = "inter_frame_delay"
CONF_DEFAULT_RETRY_COUNT = "default_retry_count"
CONF_PORT = "port"
CONF_BAUDRATE = "baudrate"
CONF_BYTESIZE = "bytesize"
CONF_PARITY = "parity"
CONF_STOPBITS = "stopbits"
