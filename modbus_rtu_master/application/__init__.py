"""Application layer of the Modbus RTU master.

Use cases compose the protocol pieces into register operations; services
hold the request/response chokepoint and the write retry loop.
"""
