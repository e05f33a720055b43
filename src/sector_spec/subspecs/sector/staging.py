"""
Sector staging.

Pieces are collected into staged sectors until a sector is sealed. A piece
may only join a sector if its whole slot, padding included, stays within the
sector's capacity.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import field_validator

from sector_spec.subspecs.fr32 import (
    DEFAULT_CONVERTER,
    ByteDomainConverter,
    PaddedBytesAmount,
    UnpaddedBytesAmount,
)
from sector_spec.subspecs.pieces import (
    MINIMUM_PIECE_SIZE,
    PieceMetadata,
    get_piece_start,
    length_with_piece,
    piece_fits,
    sum_piece_lengths,
)
from sector_spec.types import PieceTooLargeError, SectorFullError, StrictBaseModel, Uint64

logger = logging.getLogger(__name__)


class SectorClass(StrictBaseModel):
    """Size parameters shared by every sector of one kind."""

    sector_size: PaddedBytesAmount
    """Size of the sector's commitment tree leaf layer, in padded bytes."""

    @field_validator("sector_size")
    @classmethod
    def check_power_of_two(cls, v: PaddedBytesAmount) -> PaddedBytesAmount:
        """The leaf layer of a binary tree must hold a power of two of bytes."""
        size = int(v)
        if size < int(MINIMUM_PIECE_SIZE) or size & (size - 1) != 0:
            raise ValueError(
                f"sector_size must be a power of two of at least {MINIMUM_PIECE_SIZE}, got {size}"
            )
        return v

    def max_unpadded_bytes(
        self, converter: ByteDomainConverter = DEFAULT_CONVERTER
    ) -> UnpaddedBytesAmount:
        """Return how many unpadded bytes, padding included, a sector can hold."""
        return converter.to_unpadded(self.sector_size)


class StagedSector(StrictBaseModel):
    """A sector that is still accepting pieces."""

    sector_id: Uint64
    """Identifier of the sector."""

    pieces: list[PieceMetadata] = []
    """Pieces staged so far, in sector order."""

    def length(self, converter: ByteDomainConverter = DEFAULT_CONVERTER) -> UnpaddedBytesAmount:
        """Return the unpadded length of the staged pieces, padding included."""
        return sum_piece_lengths(self.pieces, converter)

    def piece_start(
        self, piece_key: str, converter: ByteDomainConverter = DEFAULT_CONVERTER
    ) -> UnpaddedBytesAmount | None:
        """Return where the piece with `piece_key` starts, or None if not staged here."""
        return get_piece_start(self.pieces, piece_key, converter)

    def add_piece(
        self,
        piece: PieceMetadata,
        max_bytes: UnpaddedBytesAmount,
        converter: ByteDomainConverter = DEFAULT_CONVERTER,
    ) -> StagedSector:
        """
        Append a piece, returning the updated sector.

        The current sector is left untouched.

        Raises:
            SectorFullError: If the piece's slot would extend past `max_bytes`.
        """
        required = length_with_piece(self.pieces, piece.num_bytes, converter)
        if required > max_bytes:
            raise SectorFullError(
                int(self.sector_id),
                piece.piece_key,
                required=int(required),
                max_bytes=int(max_bytes),
            )

        logger.debug(
            "Staged piece %s (%d bytes) in sector %d, now %d bytes long",
            piece.piece_key,
            piece.num_bytes,
            self.sector_id,
            required,
        )
        return self.model_copy(update={"pieces": [*self.pieces, piece]})


def compute_destination_sector(
    sectors: Iterable[StagedSector],
    num_bytes: UnpaddedBytesAmount,
    max_bytes: UnpaddedBytesAmount,
    converter: ByteDomainConverter = DEFAULT_CONVERTER,
) -> StagedSector | None:
    """
    Pick the staged sector a new piece should go into.

    Sectors are tried in the given order and the first one with room wins.

    Returns:
        The chosen sector, or None if a new sector has to be provisioned.

    Raises:
        PieceTooLargeError: If the piece would not fit even in an empty sector.
    """
    if not piece_fits([], num_bytes, max_bytes, converter):
        raise PieceTooLargeError(int(num_bytes), int(max_bytes))

    for sector in sectors:
        if piece_fits(sector.pieces, num_bytes, max_bytes, converter):
            return sector

    logger.debug("No staged sector has room for %d bytes", num_bytes)
    return None
