"""Constants for laying out pieces inside a sector."""

from __future__ import annotations

from typing import Final

from sector_spec.subspecs.fr32 import BYTES_PER_LEAF, PaddedBytesAmount

MINIMUM_PIECE_LEAVES: Final = 4
"""Number of commitment tree leaves in the smallest slot a piece may occupy."""

MINIMUM_PIECE_SIZE: Final = PaddedBytesAmount(MINIMUM_PIECE_LEAVES * BYTES_PER_LEAF)
"""
Smallest slot size in padded bytes (128).

Pieces smaller than this are still given a full slot, so every piece subtree
has at least four leaves.
"""
