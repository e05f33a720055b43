"""Constants of the Fr32 padding scheme."""

from __future__ import annotations

BITS_PER_BYTE: int = 8
"""Number of bits per byte."""

FR32_PADDED_BITS: int = 256
"""Bits occupied by one field element in the padded layout."""

FR32_UNPADDED_BITS: int = 254
"""
Bits of caller data a single field element can carry.

The two high bits of every 32-byte element are zeroed so the element stays
below the field modulus of the commitment tree.
"""

BYTES_PER_LEAF: int = FR32_PADDED_BITS // BITS_PER_BYTE
"""Size of one commitment tree leaf in padded bytes (32)."""
