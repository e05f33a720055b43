"""
Layout resolver.

Pieces are appended to a sector one after another. Each piece's padding
depends on the padded length of everything before it, so layout is a left to
right fold over the piece list: reordering pieces changes every offset after
the first moved piece.

All offsets and lengths returned here are unpadded byte counts measured from
the start of the sector.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import takewhile
from typing import Iterable, Sequence

from sector_spec.subspecs.fr32 import (
    DEFAULT_CONVERTER,
    ByteDomainConverter,
    UnpaddedBytesAmount,
)

from .padding import get_piece_padding
from .piece import PieceMetadata


@dataclass(frozen=True, slots=True)
class PieceLayout:
    """Resolved placement of one piece within a sector."""

    piece_key: str
    """Key of the placed piece."""

    start: UnpaddedBytesAmount
    """Offset of the first content byte, after the left padding."""

    num_bytes: UnpaddedBytesAmount
    """Content length of the piece."""

    left_padding: UnpaddedBytesAmount
    """Padding between the previous slot and this piece."""

    right_padding: UnpaddedBytesAmount
    """Padding between the end of this piece and the end of its slot."""

    @property
    def end(self) -> UnpaddedBytesAmount:
        """Offset one past the last content byte."""
        return self.start + self.num_bytes

    @property
    def slot_end(self) -> UnpaddedBytesAmount:
        """Sector length once this piece and its right padding are in place."""
        return self.end + self.right_padding


def sum_piece_lengths(
    pieces: Iterable[PieceMetadata],
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> UnpaddedBytesAmount:
    """
    Compute the total length of a run of pieces, padding included.

    Args:
        pieces: Pieces in sector order.
        converter: Mapping between the unpadded and padded domains.

    Returns:
        The unpadded sector length after the last piece's slot.
    """
    total = UnpaddedBytesAmount(0)
    for piece in pieces:
        left, right = get_piece_padding(total, piece.num_bytes, converter)
        total = total + left + piece.num_bytes + right
    return total


def get_piece_by_key(pieces: Sequence[PieceMetadata], piece_key: str) -> PieceMetadata | None:
    """Return the first piece with the given key, or None if no piece has it."""
    return next((piece for piece in pieces if piece.piece_key == piece_key), None)


def get_piece_start(
    pieces: Sequence[PieceMetadata],
    piece_key: str,
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> UnpaddedBytesAmount | None:
    """
    Find where a piece's content begins in the sector.

    The offset is the length of every piece before the first one carrying
    `piece_key`, plus that piece's own left padding.

    Args:
        pieces: Pieces in sector order.
        piece_key: Key of the piece to locate.
        converter: Mapping between the unpadded and padded domains.

    Returns:
        The unpadded start offset, or None if no piece has the key.
    """
    piece = get_piece_by_key(pieces, piece_key)
    if piece is None:
        return None

    start_byte = sum_piece_lengths(
        takewhile(lambda p: p.piece_key != piece_key, pieces),
        converter,
    )
    left_padding, _ = get_piece_padding(start_byte, piece.num_bytes, converter)

    return start_byte + left_padding


def compute_piece_layouts(
    pieces: Iterable[PieceMetadata],
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> list[PieceLayout]:
    """
    Resolve the placement of every piece in a single pass.

    Unlike `get_piece_start`, this reports each piece individually, so pieces
    sharing a key each get their own entry.
    """
    layouts: list[PieceLayout] = []
    total = UnpaddedBytesAmount(0)
    for piece in pieces:
        left, right = get_piece_padding(total, piece.num_bytes, converter)
        layout = PieceLayout(
            piece_key=piece.piece_key,
            start=total + left,
            num_bytes=piece.num_bytes,
            left_padding=left,
            right_padding=right,
        )
        layouts.append(layout)
        total = layout.slot_end
    return layouts


def length_with_piece(
    pieces: Sequence[PieceMetadata],
    num_bytes: UnpaddedBytesAmount,
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> UnpaddedBytesAmount:
    """Return the sector length once a piece of `num_bytes` is appended, padding included."""
    preceding = sum_piece_lengths(pieces, converter)
    left, right = get_piece_padding(preceding, num_bytes, converter)
    return preceding + left + num_bytes + right


def piece_fits(
    pieces: Sequence[PieceMetadata],
    num_bytes: UnpaddedBytesAmount,
    max_bytes: UnpaddedBytesAmount,
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> bool:
    """
    Check whether a piece of `num_bytes` can be appended within `max_bytes`.

    The piece counts with both paddings, since its whole slot must lie
    inside the sector.
    """
    return length_with_piece(pieces, num_bytes, converter) <= max_bytes
