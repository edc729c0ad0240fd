"""Domain layer of the Modbus RTU master.

This layer contains:
- Interfaces: abstract transport and CRC contracts
- Value Objects: function codes, exception codes, data types, read formats
- Strategies: register word codecs per data type
- Exceptions: the error taxonomy

The domain layer has no dependencies outside the Python standard library.
"""
