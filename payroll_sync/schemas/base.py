"""Shared Pydantic configuration for request and response schemas."""

from typing import Callable, TypeVar

from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from payroll_sync.core.errors import InputValidationError

T = TypeVar("T")


class RequestModel(BaseModel):
    """Accepts camelCase (wire) or snake_case keys."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True,
    )


class ResponseModel(BaseModel):
    """Built from core records by attribute; serialized with camelCase keys."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


def check(validator: Callable[..., T], *args) -> T:
    """Run a core validator, converting its error into the ValueError Pydantic expects."""
    try:
        return validator(*args)
    except InputValidationError as e:
        raise ValueError(e.message) from e
