"""Piece metadata container."""

from __future__ import annotations

from pydantic import field_validator

from sector_spec.subspecs.fr32 import UnpaddedBytesAmount
from sector_spec.types import Bytes32, StrictBaseModel


class PieceMetadata(StrictBaseModel):
    """
    One caller-supplied contribution to a sector.

    Records are immutable. Layout functions read them and never write back.
    """

    piece_key: str
    """
    Identifier chosen by the caller.

    Keys are not required to be unique. Lookups by key resolve to the first
    piece carrying it.
    """

    num_bytes: UnpaddedBytesAmount
    """Length of the piece's content in unpadded bytes. Always positive."""

    comm_p: Bytes32 | None = None
    """Piece commitment, if already computed. Not used by the layout."""

    @field_validator("num_bytes")
    @classmethod
    def check_non_empty(cls, v: UnpaddedBytesAmount) -> UnpaddedBytesAmount:
        """Reject empty pieces: they have no slot and no meaningful offset."""
        if int(v) == 0:
            raise ValueError("num_bytes must be greater than zero")
        return v
