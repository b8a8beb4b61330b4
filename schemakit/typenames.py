"""JSON Schema type names and helpers for classifying them."""

from __future__ import annotations

from typing import Any, Iterable

__all__ = [
    "TYPE_NAME_STRING",
    "TYPE_NAME_ARRAY",
    "TYPE_NAME_NUMBER",
    "TYPE_NAME_INTEGER",
    "TYPE_NAME_OBJECT",
    "TYPE_NAME_BOOLEAN",
    "TYPE_NAME_NULL",
    "PREFIX_ENUM_VALUE",
    "is_primitive_type",
    "clean_name_for_sorting",
    "is_primitive_type_list",
]

TYPE_NAME_STRING = "string"
TYPE_NAME_ARRAY = "array"
TYPE_NAME_NUMBER = "number"
TYPE_NAME_INTEGER = "integer"
TYPE_NAME_OBJECT = "object"
TYPE_NAME_BOOLEAN = "boolean"
TYPE_NAME_NULL = "null"
PREFIX_ENUM_VALUE = "enumValues_"

_PRIMITIVE_TYPES = frozenset(
    {
        TYPE_NAME_STRING,
        TYPE_NAME_NUMBER,
        TYPE_NAME_INTEGER,
        TYPE_NAME_BOOLEAN,
        TYPE_NAME_NULL,
    }
)


def is_primitive_type(t: str) -> bool:
    """Return True for the scalar JSON Schema type names."""
    return t in _PRIMITIVE_TYPES


def clean_name_for_sorting(name: str) -> str:
    """Move the enum-values prefix to the end so related names sort together."""
    if name.startswith(PREFIX_ENUM_VALUE):
        return name[len(PREFIX_ENUM_VALUE):] + "_enumValues"
    return name


def is_primitive_type_list(types: Iterable[Any]) -> bool:
    """True unless some type's first declared type name is not primitive."""
    return all(not typ.type or is_primitive_type(typ.type[0]) for typ in types)