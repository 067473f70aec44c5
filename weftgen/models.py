"""Data model for an API description.

The field names match the keys of the TOML configuration, e.g.::

    title = "Quake API"

    [query.publicID]
    description = "a valid quake ID"

    [[endpoint]]
    uri = "/quake/"
    title = "Quake"

    [[endpoint.request]]
    method = "GET"
    function = "quakeV2"
    accept = "application/vnd.geo+json;version=2"
    default = true
    parameter = "publicID"

Requests carry their parameter references as names.  The resolved
fields (``uri_parameter``, ``required_parameters`` ...) are filled in
by :mod:`weftgen.resolver` and are not read from the configuration.
"""

from __future__ import annotations

import keyword
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Method = Literal["GET", "PUT", "DELETE"]

# Filled in by the resolver, never read from the configuration.
_RESOLVED_FIELDS = (
    "uri",
    "uri_parameter",
    "required_parameters",
    "optional_parameters",
    "response_fields",
)


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid")


class Parameter(_Model):
    """A query parameter or response property."""

    id: str = ""
    description: str = ""
    type: str = ""  # e.g. int32, float64, string


class Request(_Model):
    """One method/Accept combination handled by a single function."""

    method: Method
    function: str
    accept: str = ""  # GET only, matched exactly.
    default: bool = False  # GET only, handles unmatched Accept headers.
    parameter: str = ""
    required: list[str] = Field(default_factory=list)
    optional: list[str] = Field(default_factory=list)
    response: list[str] = Field(default_factory=list)
    description: str = ""
    discussion: str = ""

    # Set during resolution.
    uri: str = Field(default="", exclude=True)
    uri_parameter: Parameter | None = Field(default=None, exclude=True)
    required_parameters: list[Parameter] = Field(default_factory=list, exclude=True)
    optional_parameters: list[Parameter] = Field(default_factory=list, exclude=True)
    response_fields: list[Parameter] = Field(default_factory=list, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _no_resolved_fields(cls, data: object) -> object:
        if isinstance(data, dict):
            given = [name for name in _RESOLVED_FIELDS if name in data]
            if given:
                raise ValueError(f"{', '.join(given)} cannot be set in the configuration")
        return data

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("function")
    @classmethod
    def _function_is_identifier(cls, value: str) -> str:
        if not value.isidentifier() or keyword.iskeyword(value):
            raise ValueError(f"{value!r} is not a valid function name")
        return value

    @model_validator(mode="after")
    def _get_only_fields(self) -> Request:
        if self.method != "GET" and (self.accept or self.default):
            raise ValueError(f"accept and default only apply to GET requests, not {self.method}")
        return self

    def required_ids(self) -> list[str]:
        return [p.id for p in self.required_parameters]

    def optional_ids(self) -> list[str]:
        return [p.id for p in self.optional_parameters]


class Endpoint(_Model):
    """A URI pattern and the requests it accepts."""

    uri: str
    title: str = ""
    description: str = ""
    discussion: str = ""
    request: list[Request] = Field(default_factory=list)


class GeneratorOptions(_Model):
    """Settings from the ``[generator]`` table."""

    runtime: str = "weft"
    handlers: str = "handlers"
    routes_file: str = "routes_auto.py"
    docs_file: str = "index.html"
    docs_uri: str = "/api-docs"

    @field_validator("runtime")
    @classmethod
    def _absolute_module_name(cls, value: str) -> str:
        if not all(part.isidentifier() for part in value.split(".")):
            raise ValueError(f"{value!r} is not a valid module name")
        return value

    @field_validator("handlers")
    @classmethod
    def _module_name(cls, value: str) -> str:
        # Relative names such as ".handlers" are allowed.
        if not all(part.isidentifier() for part in value.lstrip(".").split(".")):
            raise ValueError(f"{value!r} is not a valid module name")
        return value

    @field_validator("routes_file", "docs_file")
    @classmethod
    def _bare_file_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value:
            raise ValueError(f"{value!r} must be a plain file name")
        return value

    @model_validator(mode="after")
    def _distinct_files(self) -> GeneratorOptions:
        if self.routes_file == self.docs_file:
            raise ValueError("routes_file and docs_file must differ")
        return self


class Api(_Model):
    """The root of an API description."""

    production: bool = False
    host: str = ""
    title: str = ""
    discussion: str = ""
    repo: str = ""
    endpoint: list[Endpoint] = Field(default_factory=list)
    query: dict[str, Parameter] = Field(default_factory=dict)
    response: dict[str, Parameter] = Field(default_factory=dict)
    generator: GeneratorOptions = Field(default_factory=GeneratorOptions)
