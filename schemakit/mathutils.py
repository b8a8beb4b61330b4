"""Normalisation of numeric bounds from JSON Schema keywords."""

from __future__ import annotations

from typing import Any

__all__ = ["normalize_bounds"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize_one(
    bound: float | None,
    exclusive: Any,
    more_restrictive,
) -> tuple[float | None, bool]:
    result: float | None = None
    is_exclusive = False

    if exclusive is None:
        result = bound
    elif isinstance(exclusive, bool):
        is_exclusive = exclusive
        result = bound
    elif _is_number(exclusive):
        candidate = float(exclusive)
        if bound is None or more_restrictive(candidate, bound):
            result = candidate
            is_exclusive = True
        else:
            result = bound

    if bound is not None and result is None:
        result = bound
        is_exclusive = False

    return result, is_exclusive


def normalize_bounds(
    minimum: float | None,
    maximum: float | None,
    exclusive_minimum: Any,
    exclusive_maximum: Any,
) -> tuple[float | None, float | None, bool, bool]:
    """Combine inclusive and exclusive bounds into one bound per side.

    ``exclusive_minimum`` and ``exclusive_maximum`` may be ``None``, a boolean
    (draft 4 style) or a number (later drafts). Returns
    ``(min_bound, max_bound, min_exclusive, max_exclusive)``.
    """
    min_bound, min_exclusive = _normalize_one(
        minimum, exclusive_minimum, lambda candidate, bound: candidate > bound
    )
    max_bound, max_exclusive = _normalize_one(
        maximum, exclusive_maximum, lambda candidate, bound: candidate < bound
    )
    return min_bound, max_bound, min_exclusive, max_exclusive