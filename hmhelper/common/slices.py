"""Helpers for integer, float and string sequences and small int maps."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _parse_int(text: str) -> int:
    """Parse a plain signed decimal integer that fits in 64 bits."""
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _parse_float(text: str) -> float:
    """Parse a float, rejecting surrounding whitespace."""
    if text != text.strip():
        raise ValueError(f"invalid float: {text!r}")
    return float(text)


def float_slice_from_string(text: str, sep: str) -> list[float]:
    """Split ``text`` on ``sep`` into floats; empty fields become 0.0."""
    if not text:
        return []
    return [_parse_float(part) if part else 0.0 for part in text.split(sep)]


def int_slice_from_string(text: str, sep: str) -> list[int]:
    """Split ``text`` on ``sep`` into ints; empty fields become 0."""
    if not text:
        return []
    return [_parse_int(part) if part else 0 for part in text.split(sep)]


def index_of(values: Sequence[T], element: T) -> int:
    """Return the position of ``element`` in ``values``, or -1."""
    return next((i for i, v in enumerate(values) if v == element), -1)


def remove_index(values: list[T], index: int) -> list[T]:
    """Return ``values`` without the item at ``index``; out of range leaves it as is."""
    if index < 0 or index >= len(values):
        return values
    return values[:index] + values[index + 1:]


def remove_element(values: list[T], element: T) -> list[T]:
    """Return ``values`` without the first occurrence of ``element``."""
    index = index_of(values, element)
    if index < 0:
        return values
    return values[:index] + values[index + 1:]


def add_unique(values: list[T], element: T) -> list[T]:
    """Return ``values`` with ``element`` appended only when it is already present."""
    if index_of(values, element) < 0:
        return values
    return [*values, element]


def join_values(values: Iterable[Any], sep: str) -> str:
    """Join the string forms of ``values`` with ``sep``."""
    return sep.join(str(v) for v in values)


def unique(values: Iterable[T]) -> list[T]:
    """Return the values with duplicates dropped, keeping first occurrences in order."""
    return list(dict.fromkeys(values))


def slice_to_map(values: Iterable[T]) -> dict[T, int]:
    """Map each value to the last index at which it occurs."""
    return {v: i for i, v in enumerate(values)}


def strings_to_ints(strs: Iterable[str]) -> list[int]:
    """Convert strings to ints; any string that does not parse becomes 0."""
    result = []
    for text in strs:
        try:
            result.append(_parse_int(text))
        except ValueError:
            result.append(0)
    return result


def combine_map(source: Mapping[Any, Any], dest: MutableMapping[Any, Any]) -> None:
    """Copy every entry of ``source`` into ``dest``."""
    dest.update(source)