"""
Byte counts in the two domains of the commitment tree.

Callers talk about pieces in unpadded bytes: the length of the data they
hand in. The commitment tree is built over padded bytes: the same data with
the auxiliary bits of the Fr32 scheme inserted. The two counts describe the
same region at different scales, so they get separate types.

Both types reject arithmetic with anything but their own kind. Crossing
domains requires a `ByteDomainConverter`.
"""

from __future__ import annotations

from sector_spec.types import BaseUint


class UnpaddedBytesAmount(BaseUint):
    """A byte count before Fr32 padding, as seen by the caller (uint64)."""

    BITS = 64


class PaddedBytesAmount(BaseUint):
    """A byte count after Fr32 padding, as laid out in the sector (uint64)."""

    BITS = 64
