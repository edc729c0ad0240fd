"""Infrastructure layer of the Modbus RTU master.

The infrastructure layer contains implementations of domain interfaces:
- Protocol implementations (CRC-16, frame codec, response decoder)
- Transport implementations (serial line via pyserial)
- Decorators for transport error handling

This layer depends on:
- Domain layer (interfaces, value objects, exceptions)
- External libraries (pyserial)

But domain layer does NOT depend on infrastructure.
"""
