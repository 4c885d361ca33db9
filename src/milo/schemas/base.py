"""Shared pydantic base for every Milo configuration schema."""

from pydantic import BaseModel, ConfigDict


class MiloBaseModel(BaseModel):
    """Strict base model.

    Unknown keys are rejected, assignments are re-validated, enum members
    are stored as their values and surrounding whitespace is stripped from
    strings. Schemas that hold delimiters switch stripping off.
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
