"""Shared Pydantic configuration for API request/response models."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EmptyResponse(BaseModel):
    """Body returned by operations that produce no data."""

    model_config = ConfigDict(extra="forbid")
