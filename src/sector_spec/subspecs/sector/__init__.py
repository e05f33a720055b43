"""Sector staging and manifests built on the piece layout."""

from .manifest import SectorManifest
from .staging import SectorClass, StagedSector, compute_destination_sector

__all__ = [
    "SectorClass",
    "SectorManifest",
    "StagedSector",
    "compute_destination_sector",
]
