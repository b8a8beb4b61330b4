import json

from schemakit.yamlutils import fix_map_keys


def _all_keys(value):
    """Collect every mapping key found anywhere in a nested structure."""
    keys = []
    if isinstance(value, dict):
        for k, v in value.items():
            keys.append(k)
            keys.extend(_all_keys(v))
    elif isinstance(value, list):
        for item in value:
            keys.extend(_all_keys(item))
    return keys


def test_nested_integer_keys_become_strings():
    data = {"outer": {1: "a", 2: {3: "b"}}}
    fix_map_keys(data)
    assert data == {"outer": {"1": "a", "2": {"3": "b"}}}


def test_lists_are_walked():
    data = {"items": [{10: "x"}, "plain", [{20: "y"}]]}
    fix_map_keys(data)
    assert data == {"items": [{"10": "x"}, "plain", [{"20": "y"}]]}


def test_boolean_keys_use_lowercase_words():
    data = {"flags": {True: 1, False: 0}}
    fix_map_keys(data)
    assert data == {"flags": {"true": 1, "false": 0}}


def test_result_is_json_serialisable_and_keys_are_strings():
    data = {"a": {1: {2.0: [{None: 1}]}}, "b": 5}
    fix_map_keys(data)

    keys = _all_keys(data)
    assert keys
    assert all(isinstance(k, str) for k in keys)
    assert json.loads(json.dumps(data)) == data


def test_scalars_left_untouched():
    data = {"s": "text", "n": 3, "f": 1.5, "z": None}
    fix_map_keys(data)
    assert data == {"s": "text", "n": 3, "f": 1.5, "z": None}