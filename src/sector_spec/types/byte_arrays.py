"""
Fixed-length byte array types.

Piece commitments are opaque 32-byte values. The layout code never looks
inside them, it only carries them alongside the piece they describe.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a variety of inputs to raw bytes.

    Accepts:
      - `bytes` / `bytearray` (returned as immutable `bytes`)
      - Iterables of integers in [0, 255]
      - Hex strings, with or without a '0x' prefix (e.g. "0xdeadbeef" or "deadbeef")

    Raises:
      ValueError / TypeError if conversion is not possible or out-of-range.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    if isinstance(value, Iterable):
        return bytes(bytearray(value))
    return bytes(value)


class BaseBytes(bytes):
    """
    A base class for fixed-length byte types that inherits from `bytes`.

    Subclasses set `LENGTH`, the exact number of bytes an instance must contain.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new Bytes instance.

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = _coerce_to_bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    @classmethod
    def zero(cls) -> Self:
        """Create a new instance filled with zero bytes."""
        return cls(b"\x00" * cls.LENGTH)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        1. If the input is already an instance of the class, accept it.
        2. Otherwise, coerce bytes or hex strings through the constructor.
        3. For serialization (e.g., to JSON), convert to a 0x-prefixed hex string.
        """

        def validate(value: Any) -> BaseBytes:
            """Pydantic validation function that calls the class constructor."""
            try:
                return cls(value)
            except TypeError as e:
                raise ValueError(str(e)) from e

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.no_info_plain_validator_function(validate),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: "0x" + x.hex()
            ),
        )

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        return f"{type(self).__name__}({self.hex()})"

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)


class Bytes32(BaseBytes):
    """Fixed-size byte array of exactly 32 bytes."""

    LENGTH = 32
