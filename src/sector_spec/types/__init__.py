"""Reusable type definitions for sector layout."""

from .base import StrictBaseModel
from .byte_arrays import Bytes32
from .exceptions import PieceTooLargeError, SectorFullError, SectorSpecError
from .uint import BaseUint, Uint64

__all__ = [
    # Core types
    "BaseUint",
    "Uint64",
    "Bytes32",
    "StrictBaseModel",
    # Exceptions
    "SectorSpecError",
    "PieceTooLargeError",
    "SectorFullError",
]
