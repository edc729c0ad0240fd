"""Domain strategies."""

from .register_codec import (
    RegisterCodecStrategy,
    StructCodec,
    AsciiCodec,
    RawCodec,
    CodecFactory,
)

__all__ = [
    "RegisterCodecStrategy",
    "StructCodec",
    "AsciiCodec",
    "RawCodec",
    "CodecFactory",
]
