# schemakit

Building blocks for tools that turn JSON Schema documents into code.

## What is in the package

- `schemakit.model`: a typed model of JSON Schema. `Schema` (a root
  document) and `Type` (any subschema) are dataclasses built with
  `from_dict` from decoded JSON. Boolean schemas are accepted (`True` is
  the empty schema, `False` is `{"not": {}}`); `$id` falls back to the
  legacy `id`, `$defs` to `definitions` and `dependentSchemas` to
  `dependencies`. Settings under the `goJSONSchema` keyword are read into
  `GoJSONSchemaExtension`. `parse_type_list` decodes the `type` keyword.
  `merge_types` merges several types into a new one (earlier values win,
  lists are concatenated, `type` lists are never merged, and a list of only
  primitive types merges to the empty type); `all_of` and `any_of` do the
  same and record the `SubSchemaType` (and, for `any_of`, the number of
  members). Failures raise `EmptyTypesListError` or `CannotMergeTypesError`.
- `schemakit.parse`: `from_json_file`, `from_json_reader`,
  `from_yaml_file` and `from_yaml_reader` return a `Schema`; problems raise
  `SchemaParseError`. YAML documents are passed through JSON so they follow
  the same rules as JSON schemas.
- `schemakit.loaders`: `FileLoader` (local files), `HTTPLoader` (HTTP and
  HTTPS, choosing JSON or YAML from the `Content-Type` header or the URL's
  extension), `MultiLoader` (a dict from `RefType` to loader),
  `CachedLoader` (remembers schemas by URI), `qualified_file_name`, and the
  factories `new_default_multi_loader` and `new_default_cache_loader`.
- `schemakit.reference`: `get_ref_type` classifies a `$ref` as a
  `RefType` (`FILE`, `HTTP`, `HTTPS`).
- `schemakit.mathutils`: `normalize_bounds` combines `minimum`/`maximum`
  with draft-4 (boolean) or later (numeric) `exclusiveMinimum` /
  `exclusiveMaximum`.
- `schemakit.yamlutils`: `fix_map_keys` turns non-string keys in nested
  mappings into strings, in place.
- `schemakit.typenames`: the JSON Schema type names, `is_primitive_type`,
  `is_primitive_type_list` and `clean_name_for_sorting`.
- `schemakit.serializable`: `SerializableDate` and `SerializableTime`,
  which write `"YYYY-MM-DD"` and `"HH:MM:SS"` JSON strings with
  `marshal_json` and read them back with `unmarshal_json` (a JSON `null`
  gives `None`; a non-string raises `DateNotJSONStringError` or
  `TimeNotJSONStringError`).

## Installation

```
pip install schemakit
```

## Usage

Load a schema from disk; relative names are resolved against the
directory of the second argument, trying each extension in turn:

```python
from schemakit.loaders import new_default_cache_loader

loader = new_default_cache_loader([".json", ".yaml"], [".yaml", ".yml"])
schema = loader.load("person.json", "")
print(schema.id, sorted(schema.definitions))
```

Parse a schema held in a stream:

```python
import io
from schemakit.parse import from_yaml_reader

schema = from_yaml_reader(io.StringIO("type: object\nproperties:\n  name: {type: string}\n"))
print(schema.type, schema.properties["name"].type)
# ['object'] ['string']
```

Normalise numeric bounds:

```python
from schemakit.mathutils import normalize_bounds

normalize_bounds(100.0, 200.0, 110.0, 190.0)
# (110.0, 190.0, True, True)
```

## Errors

`qualified_file_name` raises `CannotResolveSchemaError` when no matching
file exists, and `get_ref_type` raises `UnsupportedRefSchemaError` for an
unknown URL scheme. When loading goes through `MultiLoader` or
`CachedLoader`, such failures are re-raised as `CannotLoadSchemaError`,
with the original exception chained as its cause.

## What the package does not do

The package reads, models and loads schemas; it does not generate code
from them and has no command-line tool. It does not validate documents
against a schema either.

## Running the tests

```
pip install -e ".[test]"
pytest
```