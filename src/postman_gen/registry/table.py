"""Route-table registry.

Parses a YAML/JSON route-table file into Mapping models, for generating
a collection offline without importing the application.

Example::

    types:
      UserRequest:
        - {name: name, kind: text}
        - {name: age, kind: integer}
    mappings:
      - handler: create_user
        path_patterns: [/users]
        methods: [POST]
        parameters:
          - {name: request, binding: body, type: UserRequest}
      - handler: get_user
        path_patterns: ["/users/{user_id}"]  # quoted: { opens a flow mapping
        methods: [GET]
        parameters:
          - {name: user_id, binding: path}
"""

from pathlib import Path
from typing import Iterator

import yaml

from .base import (
    FieldDescriptor,
    HandlerSignature,
    LegacyPatterns,
    Mapping,
    ParameterDescriptor,
    PathPatterns,
    TypeDescriptor,
)


class TableRouteRegistry:
    """Registry backed by an already-parsed list of mappings."""

    def __init__(self, mappings: list[Mapping]):
        self._mappings = list(mappings)

    def mappings(self) -> Iterator[Mapping]:
        return iter(self._mappings)


def load_route_table(file_path: Path) -> TableRouteRegistry:
    """Parse a route-table file (YAML or JSON) into a registry."""
    text = file_path.read_text(encoding="utf-8")
    doc = yaml.safe_load(text) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"{file_path}: expected a mapping at the top level")
    return parse_route_table(doc)


def parse_route_table(doc: dict) -> TableRouteRegistry:
    types = _parse_types(doc.get("types") or {})
    mappings = _expect(doc.get("mappings") or [], list, "'mappings'")
    return TableRouteRegistry([_parse_mapping(m, types) for m in mappings])


def _parse_types(types: dict) -> dict[str, TypeDescriptor]:
    _expect(types, dict, "'types'")
    result = {}
    for name, fields in types.items():
        fields = _expect(fields or [], list, f"type {name!r}")
        result[name] = TypeDescriptor(
            name=name,
            fields=[FieldDescriptor(**_expect(f, dict, f"field of type {name!r}")) for f in fields],
        )
    return result


def _parse_mapping(m: dict, types: dict[str, TypeDescriptor]) -> Mapping:
    _expect(m, dict, "mapping entry")
    handler = m.get("handler") or ""
    if "patterns" in m and "path_patterns" in m:
        raise ValueError(f"Mapping {handler!r} declares both 'patterns' and 'path_patterns'")

    patterns = None
    if "patterns" in m:
        patterns = LegacyPatterns(values=_as_list(m["patterns"], f"{handler!r} patterns"))
    elif "path_patterns" in m:
        patterns = PathPatterns(values=_as_list(m["path_patterns"], f"{handler!r} path_patterns"))

    parameters = _expect(m.get("parameters") or [], list, f"{handler!r} parameters")
    params = [_parse_parameter(p, types, handler) for p in parameters]
    return Mapping(
        patterns=patterns,
        methods=_as_list(m.get("methods"), f"{handler!r} methods"),
        handler=HandlerSignature(name=handler, parameters=params),
    )


def _parse_parameter(p: dict, types: dict[str, TypeDescriptor], handler: str) -> ParameterDescriptor:
    _expect(p, dict, f"parameter of handler {handler!r}")
    if not p.get("name"):
        raise ValueError(f"Handler {handler!r}: parameter without a name")

    type_name = p.get("type")
    type_descriptor = None
    if type_name is not None:
        if type_name not in types:
            raise ValueError(f"Handler {handler!r}: unknown type {type_name!r} for parameter {p['name']!r}")
        type_descriptor = types[type_name]

    return ParameterDescriptor(
        name=p["name"],
        binding=p.get("binding") or "other",
        alias=p.get("alias") or "",
        type=type_descriptor,
    )


def _as_list(value, what: str) -> list[str]:
    """Accept a single string, a list of strings, or nothing."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{what}: expected a string or a list of strings, got {value!r}")
    return value


def _expect(value, kind: type, what: str):
    if not isinstance(value, kind):
        raise ValueError(f"{what}: expected a {kind.__name__}, got {value!r}")
    return value
