"""Sector manifest loader.

Loads a description of a sector's pieces from YAML:

    SECTOR_SIZE: 1024
    CONVERTER: identity
    PIECES:
    - piece_key: x
      num_bytes: 5
    - piece_key: y
      num_bytes: 300
      comm_p: 0x7f3a...

`SECTOR_SIZE` and `CONVERTER` are optional. Without a converter the
environment default applies.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, field_validator, model_validator

from sector_spec.subspecs.fr32 import (
    CONVERTERS_BY_NAME,
    DEFAULT_CONVERTER,
    ByteDomainConverter,
    PaddedBytesAmount,
)
from sector_spec.subspecs.pieces import PieceMetadata, sum_piece_lengths
from sector_spec.types import StrictBaseModel

from .staging import SectorClass


class SectorManifest(StrictBaseModel):
    """
    An ordered list of pieces, optionally bound to a sector size.

    Field names use UPPERCASE in YAML, mapped to snake_case attributes.
    """

    sector_size: PaddedBytesAmount | None = Field(default=None, alias="SECTOR_SIZE")
    """Padded size of the sector. When set, the pieces must fit inside it."""

    converter_name: Literal["fr32", "identity"] | None = Field(default=None, alias="CONVERTER")
    """Name of the byte-domain converter to lay the pieces out with."""

    pieces: list[PieceMetadata] = Field(alias="PIECES")
    """Pieces in sector order."""

    @field_validator("pieces", mode="before")
    @classmethod
    def parse_pieces(cls, v: Any) -> list[PieceMetadata]:
        """
        Build piece records from YAML mappings.

        YAML parsers turn 0x-prefixed commitments into integers, so those are
        converted back to 32-byte hex strings first.
        """
        if not isinstance(v, list):
            raise ValueError(f"PIECES must be a list, got {type(v).__name__}")

        result = []
        for entry in v:
            if isinstance(entry, dict) and isinstance(entry.get("comm_p"), int):
                entry = entry | {"comm_p": f"0x{entry['comm_p']:064x}"}
            result.append(
                entry if isinstance(entry, PieceMetadata) else PieceMetadata.model_validate(entry)
            )
        return result

    @model_validator(mode="after")
    def validate_capacity(self) -> SectorManifest:
        """Verify the pieces fit into the sector when a size is given."""
        sector_class = self.sector_class()
        if sector_class is not None:
            capacity = sector_class.max_unpadded_bytes(self.converter)
            total = sum_piece_lengths(self.pieces, self.converter)
            if total > capacity:
                raise ValueError(
                    f"pieces need {total} bytes but the sector holds only {capacity}"
                )
        return self

    @property
    def converter(self) -> ByteDomainConverter:
        """The converter named by the manifest, or the environment default."""
        if self.converter_name is None:
            return DEFAULT_CONVERTER
        return CONVERTERS_BY_NAME[self.converter_name]

    def sector_class(self) -> SectorClass | None:
        """Return the sector class, if the manifest sets a size."""
        if self.sector_size is None:
            return None
        return SectorClass(sector_size=self.sector_size)

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> SectorManifest:
        """
        Load a manifest from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, content: str) -> SectorManifest:
        """Load a manifest from a YAML string."""
        data = yaml.safe_load(content)
        return cls.model_validate(data)
