"""Pydantic models describing GraphQL responses from remote sources."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from graphql import ExecutionResult
from pydantic import BaseModel, ConfigDict, Field, model_validator


class RemoteBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorLocation(RemoteBaseModel):
    line: int
    column: int


class ErrorPayload(RemoteBaseModel):
    message: str
    locations: list[ErrorLocation] | None = None
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None


class GraphQLResponsePayload(RemoteBaseModel):
    data: dict[str, Any] | None = None
    errors: list[ErrorPayload] | None = None

    @classmethod
    def from_result(cls, result: object) -> GraphQLResponsePayload:
        """Validate an ``ExecutionResult`` or a decoded JSON response body."""

        if isinstance(result, ExecutionResult):
            return cls.model_validate(result.formatted)
        return cls.model_validate(result)


class IntrospectionPayload(RemoteBaseModel):
    """The ``__schema`` object of an introspection response.

    Accepts the bare ``{"__schema": ...}`` object or a full response with a
    ``data`` envelope.
    """

    introspection_schema: dict[str, Any] = Field(alias="__schema")

    @model_validator(mode="before")
    @classmethod
    def _unwrap_data(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast("Mapping[str, object]", value)
            data = mapping_value.get("data")
            if "__schema" not in mapping_value and isinstance(data, Mapping):
                return data
        return value

    def as_introspection(self) -> dict[str, Any]:
        return {"__schema": self.introspection_schema}
