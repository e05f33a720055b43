"""Base model shared by every record in the package."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic base model.

    Records are frozen and reject unknown fields. Input is not coerced, so a
    byte count has to arrive as an integer and never as a string or float.

    Fields serialize under camelCase aliases (`piece_key` becomes `pieceKey`),
    and both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
