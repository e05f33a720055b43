"""
Fr32 byte-domain conversion.

Separates unpadded (caller) byte counts from padded (commitment tree) byte
counts and converts between them.
"""

from .amounts import PaddedBytesAmount, UnpaddedBytesAmount
from .constants import BYTES_PER_LEAF
from .converter import (
    CONVERTERS_BY_NAME,
    DEFAULT_CONVERTER,
    FR32_CONVERTER,
    IDENTITY_CONVERTER,
    ByteDomainConverter,
    Fr32Converter,
    IdentityConverter,
)

__all__ = [
    "UnpaddedBytesAmount",
    "PaddedBytesAmount",
    "ByteDomainConverter",
    "Fr32Converter",
    "IdentityConverter",
    "FR32_CONVERTER",
    "IDENTITY_CONVERTER",
    "CONVERTERS_BY_NAME",
    "DEFAULT_CONVERTER",
    "BYTES_PER_LEAF",
]
