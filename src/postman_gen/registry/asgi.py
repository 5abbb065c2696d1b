"""ASGI (FastAPI / Starlette) route registry.

Reads the live route table of an ASGI app and converts it into Mapping models.
"""

import inspect
from typing import Any, Iterator

from fastapi import params
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Route as StarletteRoute

from postman_gen.generator.examples import describe_type
from postman_gen.registry.base import (
    HandlerSignature,
    LegacyPatterns,
    Mapping,
    ParameterDescriptor,
    PathPatterns,
)


class FastAPIRouteRegistry:
    """Read-only view over ``app.routes``."""

    def __init__(self, app: Any):
        self.app = app

    def mappings(self) -> Iterator[Mapping]:
        for route in self.app.routes:
            yield route_to_mapping(route)


def route_to_mapping(route: BaseRoute) -> Mapping:
    """Convert one registered route into a Mapping.

    APIRoutes carry parsed path patterns, plain Starlette routes carry their
    raw string pattern, and anything else (mounts, websockets, hosts) has no
    HTTP pattern at all.
    """
    if isinstance(route, APIRoute):
        return Mapping(
            patterns=PathPatterns(values=[route.path_format]),
            methods=sorted(route.methods or ()),
            handler=_describe_api_handler(route),
        )
    if isinstance(route, StarletteRoute):
        return Mapping(
            patterns=LegacyPatterns(values=[route.path]),
            methods=sorted(route.methods or ()),
            handler=_describe_plain_handler(route.endpoint),
        )
    return Mapping(patterns=None, handler=HandlerSignature(name=_route_name(route)))


def _describe_api_handler(route: APIRoute) -> HandlerSignature:
    dependant = route.dependant
    bound: dict[str, tuple[str, Any]] = {}
    # Later groups win, giving body > query > path.
    for binding, fields in (
        ("path", dependant.path_params),
        ("query", dependant.query_params),
        ("body", dependant.body_params),
    ):
        for field in fields:
            bound[field.name] = (binding, field)

    parameters = []
    for name in _parameter_names(route.endpoint):
        if name not in bound:
            parameters.append(ParameterDescriptor(name=name))
            continue

        binding, field = bound[name]
        if binding == "body" and isinstance(getattr(field, "field_info", None), params.Form):
            # Form and file uploads are not described as JSON bodies.
            binding = "other"
        alias = field.alias if field.alias != name else ""
        type_descriptor = describe_type(_field_type(field)) if binding == "body" else None
        parameters.append(ParameterDescriptor(name=name, binding=binding, alias=alias, type=type_descriptor))

    return HandlerSignature(name=_callable_name(route.endpoint, route.name), parameters=parameters)


def _describe_plain_handler(endpoint: Any) -> HandlerSignature:
    return HandlerSignature(
        name=_callable_name(endpoint, "endpoint"),
        parameters=[ParameterDescriptor(name=name) for name in _parameter_names(endpoint)],
    )


def _parameter_names(endpoint: Any) -> list[str]:
    try:
        return list(inspect.signature(endpoint).parameters)
    except (TypeError, ValueError):
        return []


def _field_type(field: Any) -> Any:
    field_info = getattr(field, "field_info", None)
    annotation = getattr(field_info, "annotation", None)
    return annotation if annotation is not None else getattr(field, "type_", None)


def _callable_name(endpoint: Any, fallback: str) -> str:
    return getattr(endpoint, "__name__", None) or fallback


def _route_name(route: BaseRoute) -> str:
    return getattr(route, "name", None) or getattr(route, "path", None) or type(route).__name__
