"""Exception hierarchy for sector layout and staging."""

from __future__ import annotations


class SectorSpecError(Exception):
    """Base class for all recoverable sector errors."""


class PieceTooLargeError(SectorSpecError):
    """
    Raised when a piece can never fit into a sector of the configured size.

    Attributes:
        num_bytes: Unpadded size of the rejected piece.
        max_bytes: Unpadded capacity of a single sector.
    """

    def __init__(self, num_bytes: int, max_bytes: int) -> None:
        self.num_bytes = num_bytes
        self.max_bytes = max_bytes
        super().__init__(f"piece of {num_bytes} bytes exceeds sector capacity of {max_bytes} bytes")


class SectorFullError(SectorSpecError):
    """
    Raised when a piece does not fit into what remains of a staged sector.

    Attributes:
        sector_id: The sector that rejected the piece.
        piece_key: Key of the rejected piece.
        required: Unpadded sector length the piece would need, padding included.
        max_bytes: Unpadded capacity of the sector.
    """

    def __init__(self, sector_id: int, piece_key: str, *, required: int, max_bytes: int) -> None:
        self.sector_id = sector_id
        self.piece_key = piece_key
        self.required = required
        self.max_bytes = max_bytes
        super().__init__(
            f"sector {sector_id} cannot hold piece '{piece_key}': "
            f"needs {required} bytes, capacity is {max_bytes}"
        )
