"""
Bounded unsigned integers that do not mix across domains.

Each subclass is its own unit. Sums, differences, remainders and comparisons
are only defined between two values of the same concrete class, so a padded
byte count can never be added to an unpadded one by accident.
"""

from __future__ import annotations

from typing import Any, ClassVar, SupportsInt

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self


class BaseUint(int):
    """
    A base class for custom unsigned integer types that inherits from `int`.

    Sibling subclasses with the same `BITS` are not interchangeable:
    `UnpaddedBytesAmount(1) + PaddedBytesAmount(1)` raises, and so does
    `UnpaddedBytesAmount(PaddedBytesAmount(1))`.

    Amounts are additive. Multiplying or dividing two of them has no meaning
    in any domain and raises `TypeError` instead of degrading to a bare int.
    """

    BITS: ClassVar[int]
    """The number of bits in the integer (overridden by subclasses)."""

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Create and validate a new Uint instance.

        Raises:
            TypeError: If `value` is not an integer (bools are rejected too), or
                is a `BaseUint` of another class.
            OverflowError: If `value` is outside the allowed range [0, 2**BITS - 1].
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        if isinstance(value, BaseUint) and not isinstance(value, cls):
            raise TypeError(f"Cannot reinterpret {value!r} as {cls.__name__}")
        int_value = int(value)
        if not (0 <= int_value < (2**cls.BITS)):
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate through the constructor and serialize as a plain int."""

        def validate(value: Any) -> BaseUint:
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.int_schema(ge=0, lt=2**cls.BITS),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """Hook into Pydantic's JSON Schema generation system."""
        json_schema = handler(core_schema)
        json_schema.update(format=f"uint{cls.BITS}")
        return json_schema

    def _operand(self, other: Any, op_symbol: str) -> int:
        """Return `other` as an int if it shares this class, raise TypeError otherwise."""
        if not isinstance(other, type(self)):
            raise TypeError(
                f"Unsupported operand type(s) for {op_symbol}: "
                f"'{type(self).__name__}' and '{type(other).__name__}'"
            )
        return int(other)

    def __add__(self, other: Any) -> Self:
        """Handle the addition operator (`+`)."""
        return type(self)(int(self) + self._operand(other, "+"))

    def __radd__(self, other: Any) -> Self:
        """Handle the reverse addition operator (`+`)."""
        return type(self)(self._operand(other, "+") + int(self))

    def __sub__(self, other: Any) -> Self:
        """Handle the subtraction operator (`-`)."""
        return type(self)(int(self) - self._operand(other, "-"))

    def __rsub__(self, other: Any) -> Self:
        """Handle the reverse subtraction operator (`-`)."""
        return type(self)(self._operand(other, "-") - int(self))

    def __mod__(self, other: Any) -> Self:
        """Handle the modulo operator (`%`), used for alignment."""
        return type(self)(int(self) % self._operand(other, "%"))

    def __rmod__(self, other: Any) -> Self:
        """Handle the reverse modulo operator (`%`)."""
        return type(self)(self._operand(other, "%") % int(self))

    def _reject_scaling(self, other: Any) -> Any:
        """Refuse `*`, `//` and `/` in both directions."""
        raise TypeError(f"{type(self).__name__} values cannot be multiplied or divided")

    __mul__ = __rmul__ = _reject_scaling
    __floordiv__ = __rfloordiv__ = _reject_scaling
    __truediv__ = __rtruediv__ = _reject_scaling

    def __eq__(self, other: object) -> bool:
        """Handle the equality operator (`==`)."""
        return int(self) == self._operand(other, "==")

    def __ne__(self, other: object) -> bool:
        """Handle the inequality operator (`!=`)."""
        return int(self) != self._operand(other, "!=")

    def __lt__(self, other: Any) -> bool:
        """Handle the less-than operator (`<`)."""
        return int(self) < self._operand(other, "<")

    def __le__(self, other: Any) -> bool:
        """Handle the less-than-or-equal-to operator (`<=`)."""
        return int(self) <= self._operand(other, "<=")

    def __gt__(self, other: Any) -> bool:
        """Handle the greater-than operator (`>`)."""
        return int(self) > self._operand(other, ">")

    def __ge__(self, other: Any) -> bool:
        """Handle the greater-than-or-equal-to operator (`>=`)."""
        return int(self) >= self._operand(other, ">=")

    def __repr__(self) -> str:
        """Show the class, so amounts from different domains are told apart."""
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        """Return the bare number."""
        return str(int(self))

    def __hash__(self) -> int:
        """Hash by class and value, matching the class-strict equality."""
        return hash((type(self), int(self)))


class Uint64(BaseUint):
    """A type representing a 64-bit unsigned integer (uint64)."""

    BITS = 64
