import copy

import pytest

from schemakit.model import (
    CannotMergeTypesError,
    EmptyTypesListError,
    GoJSONSchemaExtension,
    Schema,
    SubSchemaType,
    Type,
    all_of,
    any_of,
    merge_types,
    parse_type_list,
)


def test_true_is_empty_schema():
    assert Type.from_dict(True) == Type()


def test_false_is_not_empty_schema():
    assert Type.from_dict(False) == Type(not_=Type())


def test_parse_type_list_single_string():
    assert parse_type_list("string") == ["string"]


def test_parse_type_list_empty_string_and_none():
    assert parse_type_list("") == []
    assert parse_type_list(None) == []


def test_parse_type_list_list():
    assert parse_type_list(["string", "null"]) == ["string", "null"]


def test_parse_type_list_rejects_number():
    with pytest.raises(ValueError, match="failed to unmarshal type list"):
        parse_type_list(5)


def test_from_dict_reads_fields():
    typ = Type.from_dict(
        {
            "type": "object",
            "required": ["name"],
            "properties": {"name": {"type": "string", "minLength": 1}},
            "exclusiveMinimum": True,
            "maximum": 10,
            "not": False,
        }
    )
    assert typ.type == ["object"]
    assert typ.required == ["name"]
    assert typ.properties["name"].type == ["string"]
    assert typ.properties["name"].min_length == 1
    assert typ.exclusive_minimum is True
    assert typ.maximum == 10.0
    assert typ.not_ == Type(not_=Type())


def test_from_dict_rejects_wrong_field_type():
    with pytest.raises(ValueError, match="maxLength"):
        Type.from_dict({"maxLength": "long"})


def test_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        Type.from_dict("string")


def test_legacy_definitions_used_when_defs_absent():
    typ = Type.from_dict({"definitions": {"a": {"type": "string"}}})
    assert typ.definitions["a"].type == ["string"]


def test_defs_take_precedence_over_definitions():
    typ = Type.from_dict(
        {"$defs": {"new": {}}, "definitions": {"old": {}}}
    )
    assert list(typ.definitions) == ["new"]


def test_legacy_dependencies_become_dependent_schemas():
    typ = Type.from_dict({"dependencies": {"a": {"type": "string"}}})
    assert typ.dependent_schemas["a"].type == ["string"]


def test_dependent_schemas_take_precedence():
    typ = Type.from_dict(
        {"dependentSchemas": {"x": {}}, "dependencies": {"y": {}}}
    )
    assert list(typ.dependent_schemas) == ["x"]


def test_extension_from_dict():
    ext = GoJSONSchemaExtension.from_dict(
        {"type": "time.Time", "nillable": True, "imports": ["time"]}
    )
    assert ext == GoJSONSchemaExtension(type="time.Time", nillable=True, imports=["time"])


def test_type_reads_extension():
    typ = Type.from_dict({"goJSONSchema": {"identifier": "Thing"}})
    assert typ.go_json_schema_extension.identifier == "Thing"


def test_schema_id_falls_back_to_legacy_id():
    schema = Schema.from_dict({"id": "https://example.com/schema"})
    assert schema.id == "https://example.com/schema"
    assert schema.legacy_id == "https://example.com/schema"


def test_schema_dollar_id_wins():
    schema = Schema.from_dict(
        {"$id": "https://example.com/schema", "id": "https://example.com/other"}
    )
    assert schema.id == "https://example.com/schema"


def test_schema_legacy_definitions():
    schema = Schema.from_dict({"definitions": {"Thing": {"type": "string"}}})
    assert schema.definitions["Thing"].type == ["string"]


def test_schema_root_dependencies_not_mapped():
    schema = Schema.from_dict({"dependencies": {"a": {}}})
    assert schema.dependent_schemas == {}


def test_schema_rejects_boolean():
    with pytest.raises(ValueError, match="failed to unmarshal schema"):
        Schema.from_dict(True)


def test_merge_empty_list_raises():
    with pytest.raises(EmptyTypesListError, match="types list is empty"):
        merge_types([])


def test_merge_non_type_raises():
    with pytest.raises(CannotMergeTypesError):
        merge_types([Type(), None])


def test_merge_primitive_types_gives_empty_type():
    types = [Type(type=["string"], min_length=3), Type(type=["integer"])]
    assert merge_types(types) == Type()


def test_merge_objects_combines_properties_and_required():
    first = Type.from_dict(
        {"type": "object", "required": ["a"], "properties": {"a": {"type": "string"}}}
    )
    second = Type.from_dict(
        {"type": "object", "required": ["b"], "properties": {"b": {"type": "number"}}}
    )
    merged = merge_types([first, second])
    assert merged.required == ["a", "b"]
    assert set(merged.properties) == {"a", "b"}
    assert merged.type == []


def test_merge_keeps_first_scalar():
    first = Type(type=["object"], title="First")
    second = Type(type=["object"], title="Second", description="Desc")
    merged = merge_types([first, second])
    assert merged.title == "First"
    assert merged.description == "Desc"


def test_merge_recurses_into_nested_types():
    first = Type(type=["array"], items=Type(title="Item"))
    second = Type(type=["array"], items=Type(title="Other", description="Desc"))
    merged = merge_types([first, second])
    assert merged.items.title == "Item"
    assert merged.items.description == "Desc"


def test_merge_does_not_mutate_inputs():
    first = Type.from_dict({"type": "object", "required": ["a"], "items": {"title": "x"}})
    second = Type.from_dict({"type": "object", "required": ["b"], "items": {"format": "y"}})
    before = (copy.deepcopy(first), copy.deepcopy(second))
    merge_types([first, second])
    assert (first, second) == before


def test_all_of_marks_sub_schema_type():
    merged = all_of([Type(type=["object"]), Type(type=["object"])])
    assert merged.sub_schema_type is SubSchemaType.ALL_OF
    assert merged.sub_schemas_count == 0


def test_any_of_records_count():
    types = [Type(type=["object"]), Type(type=["object"]), Type(type=["array"])]
    merged = any_of(types)
    assert merged.sub_schema_type is SubSchemaType.ANY_OF
    assert merged.sub_schemas_count == len(types)


def test_sub_schema_type_values():
    assert SubSchemaType("oneOf") is SubSchemaType.ONE_OF
    assert SubSchemaType.NOT.value == "not"