"""Reading schema documents from JSON and YAML sources."""

from __future__ import annotations

import base64
import datetime as _dt
import json
from typing import IO, Any

import yaml

from schemakit.model import Schema
from schemakit.yamlutils import fix_map_keys

__all__ = [
    "SchemaParseError",
    "from_json_file",
    "from_json_reader",
    "from_yaml_file",
    "from_yaml_reader",
]


class SchemaParseError(Exception):
    """Raised when a schema document cannot be read or decoded."""


def _schema_from_value(raw: Any) -> Schema:
    if raw is None:
        return Schema()
    try:
        return Schema.from_dict(raw)
    except ValueError as exc:
        raise SchemaParseError(f"failed to unmarshal JSON: {exc}") from exc


def from_json_reader(reader: IO[Any]) -> Schema:
    """Decode the first JSON value read from ``reader`` as a schema."""
    data = reader.read()
    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        raw, _ = json.JSONDecoder().raw_decode(text.lstrip())
    except ValueError as exc:
        raise SchemaParseError(f"failed to unmarshal JSON: {exc}") from exc
    return _schema_from_value(raw)


def from_json_file(file_name: str) -> Schema:
    """Read a schema from a JSON file."""
    try:
        handle = open(file_name, "rb")
    except OSError as exc:
        raise SchemaParseError(f"failed to open file: {exc}") from exc
    with handle:
        return from_json_reader(handle)


def _json_default(value: Any) -> Any:
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"cannot encode {type(value).__name__}")


def from_yaml_reader(reader: IO[Any]) -> Schema:
    """Decode a YAML document read from ``reader`` as a schema.

    The document goes through JSON first so that it is interpreted by the
    same rules as a JSON schema.
    """
    try:
        data = yaml.safe_load(reader)
    except yaml.YAMLError as exc:
        raise SchemaParseError(f"failed to unmarshal YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaParseError(
            f"failed to unmarshal YAML: expected a mapping, got {type(data).__name__}"
        )

    wrapper: dict[str, Any] = {"": data}
    fix_map_keys(wrapper)
    data = wrapper[""]

    try:
        encoded = json.dumps(data, default=_json_default, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SchemaParseError(f"failed to marshal JSON: {exc}") from exc
    return _schema_from_value(json.loads(encoded))


def from_yaml_file(file_name: str) -> Schema:
    """Read a schema from a YAML file."""
    try:
        handle = open(file_name, "rb")
    except OSError as exc:
        raise SchemaParseError(f"failed to open file: {exc}") from exc
    with handle:
        return from_yaml_reader(handle)