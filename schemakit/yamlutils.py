"""Helpers for cleaning up YAML decoding results."""

from __future__ import annotations

from typing import Any

__all__ = ["fix_map_keys"]


def _format_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "<nil>"
    if isinstance(key, float) and key.is_integer() and abs(key) < 1e21:
        return str(int(key))
    return str(key)


def _fix_keys_in(value: Any) -> Any:
    if isinstance(value, list):
        value[:] = [_fix_keys_in(item) for item in value]
        return value
    if isinstance(value, dict):
        return {_format_key(k): _fix_keys_in(v) for k, v in value.items()}
    return value


def fix_map_keys(m: dict[str, Any]) -> None:
    """Turn non-string keys in nested mappings of ``m`` into strings, in place."""
    for key, value in list(m.items()):
        m[key] = _fix_keys_in(value)