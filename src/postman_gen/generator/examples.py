"""Example value generator — placeholder request bodies by field kind."""

import dataclasses
import inspect
import typing
from types import NoneType, UnionType
from typing import Annotated, Any, ClassVar

from postman_gen.registry.base import FieldDescriptor, FieldKind, TypeDescriptor

PLACEHOLDERS: dict[str, Any] = {
    "text": "example",
    "long": 0,
    "integer": 0,
    "boolean": False,
    "double": 0.0,
}

NESTED_PLACEHOLDER = "nestedObject"


def generate_example(type_descriptor: TypeDescriptor | None) -> dict[str, Any]:
    """Map every field of the type to a placeholder value.

    Nested structures, collections and unknown types are not walked;
    they all become ``"nestedObject"``.
    """
    if type_descriptor is None:
        return {}
    return {
        field.name: PLACEHOLDERS.get(field.kind, NESTED_PLACEHOLDER)
        for field in type_descriptor.fields
    }


def describe_type(tp: Any) -> TypeDescriptor:
    """Build a TypeDescriptor from the annotations declared directly on a class.

    Works for pydantic models, dataclasses and plain annotated classes.
    Inherited fields are not walked and field-level aliases are ignored.
    """
    tp = _unwrap(tp)
    if not inspect.isclass(tp) or tp.__module__ == "builtins":
        return TypeDescriptor(name=_type_name(tp), fields=[])

    own = inspect.get_annotations(tp)
    try:
        hints = typing.get_type_hints(tp)
    except (NameError, TypeError, AttributeError):
        hints = {}
    model_fields = getattr(tp, "model_fields", None) or {}

    fields = []
    for name, raw in own.items():
        if name.startswith("_"):
            continue
        if name in model_fields:
            hint = model_fields[name].annotation
        else:
            hint = hints.get(name, raw)
        if typing.get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        if isinstance(hint, str) and hint.startswith(("ClassVar", "typing.ClassVar")):
            continue
        fields.append(FieldDescriptor(name=name, kind=classify(hint)))

    if dataclasses.is_dataclass(tp):
        declared = {f.name for f in dataclasses.fields(tp)}
        fields = [f for f in fields if f.name in declared]

    return TypeDescriptor(name=tp.__name__, fields=fields)


def classify(hint: Any) -> FieldKind:
    """Classify a field annotation, unwrapping Optional and Annotated first."""
    hint = _unwrap(hint)
    if isinstance(hint, str):
        return _classify_name(hint)
    if hint is str:
        return "text"
    if hint is int:
        return "integer"
    if hint is bool:
        return "boolean"
    if hint is float:
        return "double"
    return "other"


def _classify_name(name: str) -> FieldKind:
    # Unresolvable forward references: classify by their spelling.
    name = name.strip()
    if name.startswith("Optional[") and name.endswith("]"):
        name = name[len("Optional["):-1]
    parts = [p.strip() for p in name.split("|") if p.strip() != "None"]
    if len(parts) == 1:
        name = parts[0]
    return {"str": "text", "int": "integer", "bool": "boolean", "float": "double"}.get(name, "other")


def _unwrap(hint: Any) -> Any:
    """Strip Annotated[...] and Optional[...] down to the inner type."""
    while True:
        origin = typing.get_origin(hint)
        if origin is Annotated:
            hint = typing.get_args(hint)[0]
            continue
        if origin is typing.Union or origin is UnionType:
            args = [a for a in typing.get_args(hint) if a is not NoneType]
            if len(args) == 1:
                hint = args[0]
                continue
        return hint


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)
