"""Shared model config and base types."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AMBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
