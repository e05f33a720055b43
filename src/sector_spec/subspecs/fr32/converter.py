"""
Conversion between unpadded and padded byte counts.

The commitment tree hashes 32-byte leaves that must each be a valid field
element. Fr32 padding guarantees that by storing only 254 bits of caller data
in every 256-bit leaf, so a padded region is roughly 128/127 times the size of
the data it holds. The exact expansion is a property of the tree, which is why
the layout code takes a converter instead of hard-coding a ratio.

Any converter must satisfy two laws:

- Round trip: `to_unpadded(to_padded(x)) == x` for every valid `x`.
- Monotonicity: a larger unpadded amount never maps to a smaller padded one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sector_spec.config import SECTOR_ENV

from .amounts import PaddedBytesAmount, UnpaddedBytesAmount
from .constants import BITS_PER_BYTE, FR32_PADDED_BITS, FR32_UNPADDED_BITS


class ByteDomainConverter(ABC):
    """Abstract mapping between the unpadded and padded byte domains."""

    @abstractmethod
    def to_padded(self, amount: UnpaddedBytesAmount) -> PaddedBytesAmount:
        """Return the padded size of `amount` unpadded bytes."""
        ...

    @abstractmethod
    def to_unpadded(self, amount: PaddedBytesAmount) -> UnpaddedBytesAmount:
        """Return the number of unpadded bytes that fit in `amount` padded bytes."""
        ...

    @staticmethod
    def _expect(amount: object, kind: type) -> int:
        """Return `amount` as an int, refusing values from the other domain."""
        if not isinstance(amount, kind):
            raise TypeError(f"Expected {kind.__name__}, got {type(amount).__name__}")
        return int(amount)  # type: ignore[call-overload]

    def __repr__(self) -> str:
        """Return the class name, converters carry no state."""
        return f"{type(self).__name__}()"


class IdentityConverter(ByteDomainConverter):
    """
    A one-to-one converter.

    Useful when reasoning in whole leaves: with this converter `n * 32`
    unpadded bytes occupy exactly `n` leaves.
    """

    def to_padded(self, amount: UnpaddedBytesAmount) -> PaddedBytesAmount:
        """Reinterpret the count in the padded domain."""
        return PaddedBytesAmount(self._expect(amount, UnpaddedBytesAmount))

    def to_unpadded(self, amount: PaddedBytesAmount) -> UnpaddedBytesAmount:
        """Reinterpret the count in the unpadded domain."""
        return UnpaddedBytesAmount(self._expect(amount, PaddedBytesAmount))


class Fr32Converter(ByteDomainConverter):
    """
    The Fr32 scheme: 254 data bits per 256-bit leaf.

    Both directions work on bit counts. Padding rounds up to a whole byte so
    the last partial leaf is covered; unpadding rounds down so only complete
    bytes of data are reported.
    """

    def to_padded(self, amount: UnpaddedBytesAmount) -> PaddedBytesAmount:
        """
        Expand an unpadded byte count.

        Example: 127 bytes are 1016 bits, exactly four full field elements,
        which occupy 4 * 256 bits = 128 padded bytes.
        """
        raw_bits = self._expect(amount, UnpaddedBytesAmount) * BITS_PER_BYTE
        full_elements, partial_bits = divmod(raw_bits, FR32_UNPADDED_BITS)
        padded_bits = full_elements * FR32_PADDED_BITS + partial_bits

        # Round up so a trailing partial byte is still allocated.
        return PaddedBytesAmount(-(-padded_bits // BITS_PER_BYTE))

    def to_unpadded(self, amount: PaddedBytesAmount) -> UnpaddedBytesAmount:
        """Shrink a padded byte count to the data bytes it can hold."""
        raw_bits = self._expect(amount, PaddedBytesAmount) * BITS_PER_BYTE
        full_elements, partial_bits = divmod(raw_bits, FR32_PADDED_BITS)
        unpadded_bits = full_elements * FR32_UNPADDED_BITS + partial_bits
        return UnpaddedBytesAmount(unpadded_bits // BITS_PER_BYTE)


IDENTITY_CONVERTER = IdentityConverter()
"""Shared one-to-one converter."""

FR32_CONVERTER = Fr32Converter()
"""Shared converter for the Fr32 scheme."""

SECTOR_ENV_TO_CONVERTERS: dict[str, ByteDomainConverter] = {
    "test": IDENTITY_CONVERTER,
    "prod": FR32_CONVERTER,
}
"""Mapping from `SECTOR_ENV` value to the converter used by default."""

CONVERTERS_BY_NAME: dict[str, ByteDomainConverter] = {
    "identity": IDENTITY_CONVERTER,
    "fr32": FR32_CONVERTER,
}
"""Converters addressable by name from manifests and the command line."""

DEFAULT_CONVERTER: ByteDomainConverter = SECTOR_ENV_TO_CONVERTERS[SECTOR_ENV]
"""The converter used when a caller does not inject one."""
