"""
Padding calculator.

A sector is the leaf layer of a binary commitment tree. For a piece to have
its own subtree, it must occupy a slot whose size is a power of two and whose
start is a multiple of that size. Anything short of that would make the piece
straddle two subtrees, and its commitment could no longer be checked against
the sector's.

Placing a piece therefore takes two steps:

1. Size the slot: round the padded piece length up to a power of two, with a
   floor of `MINIMUM_PIECE_SIZE`.
2. Align the slot: advance the sector to the next multiple of the slot size.

The gap before the piece is its left padding. The gap between the end of the
piece and the end of its slot is its right padding.

All sizing happens in padded bytes, since that is what the tree sees. The
results are reported in unpadded bytes, which is what callers count in.
"""

from __future__ import annotations

from typing import NamedTuple

from sector_spec.subspecs.fr32 import (
    DEFAULT_CONVERTER,
    ByteDomainConverter,
    PaddedBytesAmount,
    UnpaddedBytesAmount,
)

from .constants import MINIMUM_PIECE_SIZE


class PiecePadding(NamedTuple):
    """Unpadded bytes placed before and after a piece within its slot."""

    left: UnpaddedBytesAmount
    """Bytes inserted before the piece to align its slot."""

    right: UnpaddedBytesAmount
    """Bytes inserted after the piece to fill its slot."""


def power_of_two_above(x: int) -> int:
    """
    Calculates the smallest power of two strictly greater than x.

    Examples: 0->1, 1->2, 3->4, 4->8, 127->128, 128->256.

    `power_of_two_above(n - 1)` is therefore the smallest power of two that
    is at least `n`, with exact powers of two mapping to themselves.
    """
    assert x >= 0, "power_of_two_above is only defined for non-negative integers"
    return 1 << x.bit_length()


def padded_slot_size(piece_length_on_disk: PaddedBytesAmount) -> PaddedBytesAmount:
    """Return the slot size, in padded bytes, for a piece of the given padded length."""
    adjusted_piece_length = max(MINIMUM_PIECE_SIZE, piece_length_on_disk)
    return PaddedBytesAmount(power_of_two_above(int(adjusted_piece_length) - 1))


def slot_size(
    piece_length: UnpaddedBytesAmount,
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> PaddedBytesAmount:
    """Return the slot size, in padded bytes, allocated to a piece of `piece_length`."""
    return padded_slot_size(converter.to_padded(piece_length))


def get_padded_piece_padding(
    sector_length: UnpaddedBytesAmount,
    piece_length: UnpaddedBytesAmount,
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> tuple[PaddedBytesAmount, PaddedBytesAmount]:
    """
    Compute the padding needed to append a piece, in padded bytes.

    This is the exact placement in the tree: `to_padded(sector_length)` plus
    the left padding is always a multiple of the slot size, and the padded
    piece plus the right padding is always exactly one slot.

    Raises:
        AssertionError: If the piece is empty or the converter maps a piece
            to fewer padded bytes than it has unpadded ones.
    """
    assert piece_length > UnpaddedBytesAmount(0), "Piece length must be greater than zero"

    sector_length_on_disk = converter.to_padded(sector_length)
    piece_length_on_disk = converter.to_padded(piece_length)
    assert int(piece_length_on_disk) >= int(piece_length), (
        f"{converter!r} shrank {piece_length!r} to {piece_length_on_disk!r}"
    )

    slot = padded_slot_size(piece_length_on_disk)

    # Distance from the sector end up to the next multiple of the slot size.
    #
    # This is (-sector_length_on_disk) mod slot, taken on non-negative values:
    # an already aligned sector yields 0, never a whole slot.
    left_padding = (slot - sector_length_on_disk % slot) % slot

    # Remainder of the slot after the piece itself, in [0, slot).
    right_padding = slot - piece_length_on_disk

    return left_padding, right_padding


def get_piece_padding(
    sector_length: UnpaddedBytesAmount,
    piece_length: UnpaddedBytesAmount,
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> PiecePadding:
    """
    Compute the padding needed to append a piece to a sector.

    Converting the paddings back rounds down. With a lossy converter such as
    Fr32 the unpadded running total can therefore end a little short of the
    padded slot boundary; the next piece's left padding absorbs the gap.

    Args:
        sector_length: Unpadded length of everything already in the sector,
            padding included.
        piece_length: Unpadded length of the piece to append.
        converter: Mapping between the unpadded and padded domains.

    Returns:
        The left and right padding, in unpadded bytes.

    Raises:
        AssertionError: If the piece is empty or the converter maps a piece
            to fewer padded bytes than it has unpadded ones.
    """
    left, right = get_padded_piece_padding(sector_length, piece_length, converter)
    return PiecePadding(left=converter.to_unpadded(left), right=converter.to_unpadded(right))
