"""
Piece layout within a sector.

Computes where each piece sits once it has been padded into a power-of-two,
aligned slot of the sector's commitment tree.
"""

from .constants import MINIMUM_PIECE_SIZE
from .layout import (
    PieceLayout,
    compute_piece_layouts,
    get_piece_by_key,
    get_piece_start,
    length_with_piece,
    piece_fits,
    sum_piece_lengths,
)
from .padding import (
    PiecePadding,
    get_padded_piece_padding,
    get_piece_padding,
    power_of_two_above,
    slot_size,
)
from .piece import PieceMetadata

__all__ = [
    "MINIMUM_PIECE_SIZE",
    "PieceMetadata",
    "PiecePadding",
    "PieceLayout",
    "get_piece_padding",
    "get_padded_piece_padding",
    "power_of_two_above",
    "slot_size",
    "sum_piece_lengths",
    "get_piece_by_key",
    "get_piece_start",
    "compute_piece_layouts",
    "length_with_piece",
    "piece_fits",
]
