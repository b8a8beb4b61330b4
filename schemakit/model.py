"""The JSON Schema object model, decoding from parsed JSON, and type merging."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Iterable

from schemakit.typenames import is_primitive_type_list

__all__ = [
    "CannotMergeTypesError",
    "EmptyTypesListError",
    "SubSchemaType",
    "GoJSONSchemaExtension",
    "Type",
    "Schema",
    "parse_type_list",
    "merge_types",
    "all_of",
    "any_of",
]


class CannotMergeTypesError(ValueError):
    """Raised when a list of types cannot be merged into one."""

    def __init__(self, detail: str = "") -> None:
        message = "cannot merge types"
        super().__init__(f"{message}: {detail}" if detail else message)


class EmptyTypesListError(ValueError):
    """Raised when merging an empty list of types."""

    def __init__(self) -> None:
        super().__init__("types list is empty")


class SubSchemaType(str, Enum):
    """The combinator a merged type was built from."""

    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"


def _type_error(key: str, expected: str, value: Any) -> ValueError:
    return ValueError(
        f"field {key!r}: expected {expected}, got {type(value).__name__}"
    )


def _decode_string(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise _type_error(key, "string", value)
    return value


def _decode_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_error(key, "integer", value)
    return value


def _decode_number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_error(key, "number", value)
    return float(value)


def _decode_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise _type_error(key, "boolean", value)
    return value


def _decode_any(value: Any, key: str) -> Any:
    return value


def _decode_list(value: Any, key: str) -> list:
    if not isinstance(value, list):
        raise _type_error(key, "array", value)
    return list(value)


def _decode_string_list(value: Any, key: str) -> list[str]:
    return [
        "" if item is None else _decode_string(item, key)
        for item in _decode_list(value, key)
    ]


def _decode_map(value: Any, key: str) -> dict:
    if not isinstance(value, dict):
        raise _type_error(key, "object", value)
    return value


def _decode_type(value: Any, key: str) -> Type:
    return Type.from_dict(value)


def _decode_type_array(value: Any, key: str) -> list[Type | None]:
    return [
        None if item is None else Type.from_dict(item)
        for item in _decode_list(value, key)
    ]


def _decode_type_map(value: Any, key: str) -> dict[str, Type | None]:
    return {
        name: None if item is None else Type.from_dict(item)
        for name, item in _decode_map(value, key).items()
    }


def _decode_string_list_map(value: Any, key: str) -> dict[str, list[str]]:
    return {
        name: [] if item is None else _decode_string_list(item, key)
        for name, item in _decode_map(value, key).items()
    }


def _decode_extension(value: Any, key: str) -> GoJSONSchemaExtension:
    return GoJSONSchemaExtension.from_dict(_decode_map(value, key))


def _decode_type_list(value: Any, key: str) -> list[str]:
    return parse_type_list(value)


def parse_type_list(value: Any) -> list[str]:
    """Decode a ``type`` keyword: a single name or a list of names."""
    if isinstance(value, list):
        result = []
        for item in value:
            if item is None:
                result.append("")
            elif isinstance(item, str):
                result.append(item)
            else:
                raise ValueError(
                    f"failed to unmarshal type list: unexpected {type(item).__name__}"
                )
        return result
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    raise ValueError(f"failed to unmarshal type list: unexpected {type(value).__name__}")


@dataclass(kw_only=True)
class GoJSONSchemaExtension:
    """Generator-specific settings attached to a schema under ``goJSONSchema``."""

    type: str | None = None
    identifier: str | None = None
    nillable: bool = False
    imports: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> GoJSONSchemaExtension:
        """Build the extension from its decoded JSON object."""
        key = "goJSONSchema"
        raw = _decode_map(raw, key)
        kwargs: dict[str, Any] = {}
        if raw.get("type") is not None:
            kwargs["type"] = _decode_string(raw["type"], "type")
        if raw.get("identifier") is not None:
            kwargs["identifier"] = _decode_string(raw["identifier"], "identifier")
        if raw.get("nillable") is not None:
            kwargs["nillable"] = _decode_bool(raw["nillable"], "nillable")
        if raw.get("imports") is not None:
            kwargs["imports"] = _decode_string_list(raw["imports"], "imports")
        return cls(**kwargs)


_FIELDS: dict[str, tuple[str, Callable[[Any, str], Any]]] = {
    "$schema": ("version", _decode_string),
    "$ref": ("ref", _decode_string),
    "multipleOf": ("multiple_of", _decode_number),
    "maximum": ("maximum", _decode_number),
    "exclusiveMaximum": ("exclusive_maximum", _decode_any),
    "minimum": ("minimum", _decode_number),
    "exclusiveMinimum": ("exclusive_minimum", _decode_any),
    "maxLength": ("max_length", _decode_int),
    "minLength": ("min_length", _decode_int),
    "pattern": ("pattern", _decode_string),
    "additionalItems": ("additional_items", _decode_type),
    "items": ("items", _decode_type),
    "maxItems": ("max_items", _decode_int),
    "minItems": ("min_items", _decode_int),
    "uniqueItems": ("unique_items", _decode_bool),
    "maxProperties": ("max_properties", _decode_int),
    "minProperties": ("min_properties", _decode_int),
    "required": ("required", _decode_string_list),
    "properties": ("properties", _decode_type_map),
    "patternProperties": ("pattern_properties", _decode_type_map),
    "additionalProperties": ("additional_properties", _decode_type),
    "enum": ("enum", _decode_list),
    "type": ("type", _decode_type_list),
    "allOf": ("all_of", _decode_type_array),
    "anyOf": ("any_of", _decode_type_array),
    "oneOf": ("one_of", _decode_type_array),
    "not": ("not_", _decode_type),
    "title": ("title", _decode_string),
    "description": ("description", _decode_string),
    "default": ("default", _decode_any),
    "format": ("format", _decode_string),
    "media": ("media", _decode_type),
    "binaryEncoding": ("binary_encoding", _decode_string),
    "dependentRequired": ("dependent_required", _decode_string_list_map),
    "$defs": ("definitions", _decode_type_map),
    "dependentSchemas": ("dependent_schemas", _decode_type_map),
    "goJSONSchema": ("go_json_schema_extension", _decode_extension),
}


@dataclass(kw_only=True)
class Type:
    """A JSON Schema (sub)schema."""

    version: str = ""
    ref: str = ""
    multiple_of: float | None = None
    maximum: float | None = None
    exclusive_maximum: Any = None
    minimum: float | None = None
    exclusive_minimum: Any = None
    max_length: int = 0
    min_length: int = 0
    pattern: str = ""
    additional_items: Type | None = None
    items: Type | None = None
    max_items: int = 0
    min_items: int = 0
    unique_items: bool = False
    max_properties: int = 0
    min_properties: int = 0
    required: list[str] = field(default_factory=list)
    properties: dict[str, Type | None] = field(default_factory=dict)
    pattern_properties: dict[str, Type | None] = field(default_factory=dict)
    additional_properties: Type | None = None
    enum: list[Any] = field(default_factory=list)
    type: list[str] = field(default_factory=list)
    all_of: list[Type | None] = field(default_factory=list)
    any_of: list[Type | None] = field(default_factory=list)
    one_of: list[Type | None] = field(default_factory=list)
    not_: Type | None = None
    title: str = ""
    description: str = ""
    default: Any = None
    format: str = ""
    media: Type | None = None
    binary_encoding: str = ""
    dependent_required: dict[str, list[str]] = field(default_factory=dict)
    definitions: dict[str, Type | None] = field(default_factory=dict)
    dependent_schemas: dict[str, Type | None] = field(default_factory=dict)
    go_json_schema_extension: GoJSONSchemaExtension | None = None

    sub_schema_type: SubSchemaType | None = None
    sub_schemas_count: int = 0
    sub_schema_type_elem: bool = False
    dereferenced: bool = False

    @staticmethod
    def _decode_fields(raw: dict[str, Any]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        for key, (attr, decode) in _FIELDS.items():
            value = raw.get(key)
            if value is not None:
                kwargs[attr] = decode(value, key)
        return kwargs

    @classmethod
    def from_dict(cls, raw: Any) -> Type:
        """Build a type from decoded JSON.

        ``True`` means the empty schema and ``False`` means ``{"not": {}}``.
        The legacy ``definitions`` and ``dependencies`` keywords are used
        when their newer counterparts are absent.
        """
        if isinstance(raw, bool):
            return cls() if raw else cls(not_=cls())
        if not isinstance(raw, dict):
            raise ValueError(
                f"failed to unmarshal type: expected object or boolean, "
                f"got {type(raw).__name__}"
            )
        try:
            kwargs = cls._decode_fields(raw)
            if "definitions" not in kwargs and raw.get("definitions") is not None:
                kwargs["definitions"] = _decode_type_map(raw["definitions"], "definitions")
            if "dependent_schemas" not in kwargs and raw.get("dependencies") is not None:
                kwargs["dependent_schemas"] = _decode_type_map(
                    raw["dependencies"], "dependencies"
                )
        except ValueError as exc:
            if str(exc).startswith("failed to unmarshal"):
                raise
            raise ValueError(f"failed to unmarshal type: {exc}") from exc
        return cls(**kwargs)


@dataclass(kw_only=True)
class Schema(Type):
    """A root schema document."""

    id: str = ""
    legacy_id: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> Schema:
        """Build a root schema from a decoded JSON object.

        ``$id`` falls back to ``id`` and ``$defs`` to ``definitions``.
        """
        if not isinstance(raw, dict):
            raise ValueError(
                f"failed to unmarshal schema: expected object, got {type(raw).__name__}"
            )
        try:
            kwargs = Type._decode_fields(raw)
            schema_id = _decode_string(raw["$id"], "$id") if raw.get("$id") is not None else ""
            legacy_id = _decode_string(raw["id"], "id") if raw.get("id") is not None else ""
            if "definitions" not in kwargs and raw.get("definitions") is not None:
                kwargs["definitions"] = _decode_type_map(raw["definitions"], "definitions")
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal schema: {exc}") from exc
        return cls(id=schema_id or legacy_id, legacy_id=legacy_id, **kwargs)


_UNMERGED_TYPE_FIELDS = frozenset(
    {"type", "sub_schema_type", "sub_schemas_count", "sub_schema_type_elem"}
)


def _merge_into(dst: Any, src: Any, skip: frozenset[str]) -> None:
    """Fill the empty parts of ``dst`` from ``src``; lists are appended."""
    for f in fields(dst):
        if f.name in skip:
            continue
        current = getattr(dst, f.name)
        incoming = getattr(src, f.name)
        if isinstance(incoming, list):
            if incoming:
                setattr(dst, f.name, current + copy.deepcopy(incoming))
        elif isinstance(incoming, dict):
            merged = dict(current)
            for key, value in incoming.items():
                if merged.get(key) is None:
                    merged[key] = copy.deepcopy(value)
            setattr(dst, f.name, merged)
        elif isinstance(incoming, Type):
            if current is None:
                setattr(dst, f.name, copy.deepcopy(incoming))
            else:
                _merge_into(current, incoming, _UNMERGED_TYPE_FIELDS)
        elif isinstance(incoming, GoJSONSchemaExtension):
            if current is None:
                setattr(dst, f.name, copy.deepcopy(incoming))
            else:
                _merge_into(current, incoming, frozenset())
        elif incoming is not None:
            empty = current is None if f.default is None else not current
            if empty:
                setattr(dst, f.name, copy.deepcopy(incoming))


def merge_types(types: Iterable[Type]) -> Type:
    """Merge types into a new one; earlier values win and lists are concatenated.

    ``type`` lists are never merged, and a list of only primitive types
    merges to the empty type.
    """
    types = list(types)
    if not types:
        raise EmptyTypesListError()
    for typ in types:
        if not isinstance(typ, Type):
            raise CannotMergeTypesError(f"not a type: {typ!r}")

    result = Type()
    if is_primitive_type_list(types):
        return result

    for typ in types:
        _merge_into(result, typ, _UNMERGED_TYPE_FIELDS)
    return result


def all_of(types: Iterable[Type]) -> Type:
    """Merge the members of an ``allOf`` and mark the result as such."""
    typ = merge_types(types)
    typ.sub_schema_type = SubSchemaType.ALL_OF
    return typ


def any_of(types: Iterable[Type]) -> Type:
    """Merge the members of an ``anyOf``, recording how many there were."""
    types = list(types)
    typ = merge_types(types)
    typ.sub_schema_type = SubSchemaType.ANY_OF
    typ.sub_schemas_count = len(types)
    return typ