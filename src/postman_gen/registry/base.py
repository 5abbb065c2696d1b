"""Unified data models for route registries.

All registries (FastAPI apps, route-table files) convert their routes
into these standard models for downstream processing.
"""

from typing import Iterable, Literal, Protocol

from pydantic import BaseModel, field_validator

FieldKind = Literal["text", "long", "integer", "boolean", "double", "other"]
Binding = Literal["body", "query", "path", "other"]


class FieldDescriptor(BaseModel):
    """A single field of a structured request type."""

    name: str
    kind: FieldKind = "other"


class TypeDescriptor(BaseModel):
    """A structured type with its directly declared fields, in order."""

    name: str
    fields: list[FieldDescriptor] = []


class ParameterDescriptor(BaseModel):
    """A single handler argument and how the framework binds it."""

    name: str
    binding: Binding = "other"
    alias: str = ""  # explicit query key, empty when not overridden
    type: TypeDescriptor | None = None


class HandlerSignature(BaseModel):
    """The function serving a mapping."""

    name: str
    parameters: list[ParameterDescriptor] = []


def _unique(values: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return seen


class LegacyPatterns(BaseModel):
    """Plain string patterns (e.g. a Starlette ``Route.path``)."""

    kind: Literal["legacy"] = "legacy"
    values: list[str]

    @field_validator("values")
    @classmethod
    def _dedupe(cls, v: list[str]) -> list[str]:
        return _unique(v)


class PathPatterns(BaseModel):
    """Parsed path patterns (e.g. a FastAPI ``APIRoute.path_format``)."""

    kind: Literal["path"] = "path"
    values: list[str]

    @field_validator("values")
    @classmethod
    def _dedupe(cls, v: list[str]) -> list[str]:
        return _unique(v)


class Mapping(BaseModel):
    """One registered route-handler association."""

    patterns: LegacyPatterns | PathPatterns | None = None
    methods: list[str] = []
    handler: HandlerSignature

    @field_validator("methods")
    @classmethod
    def _normalize_methods(cls, v: list[str]) -> list[str]:
        return _unique(m.upper() for m in v)


class RouteRegistry(Protocol):
    """Read-only view over an application's registered mappings."""

    def mappings(self) -> Iterable[Mapping]: ...
