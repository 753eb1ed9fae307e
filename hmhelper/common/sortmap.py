"""Sorting helpers for int key/value maps."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass
class KVInt:
    """An int key with an int value."""

    k: int
    v: int


def sorted_int64_keys(mapping: Mapping[int, int]) -> list[int]:
    """Keys of ``mapping`` ordered by value, largest first."""
    return sorted(mapping, key=lambda k: mapping[k], reverse=True)


def _pairs(mapping: Mapping[int, int]) -> list[KVInt]:
    return [KVInt(k, v) for k, v in mapping.items()]


def sort_kv_int_map(mapping: Mapping[int, int]) -> list[KVInt]:
    """Pairs of ``mapping`` ordered by value, smallest first."""
    return sort_kv_int_slice(_pairs(mapping))


def sort_kv_int_map_desc(mapping: Mapping[int, int]) -> list[KVInt]:
    """Pairs of ``mapping`` ordered by value, largest first."""
    return sort_kv_int_slice_desc(_pairs(mapping))


def sort_kv_int_map_by_key(mapping: Mapping[int, int]) -> list[KVInt]:
    """Pairs of ``mapping`` ordered by key, smallest first."""
    items = _pairs(mapping)
    items.sort(key=lambda kv: kv.k)
    return items


def sort_kv_int_slice(items: list[KVInt]) -> list[KVInt]:
    """Sort ``items`` in place by value ascending and return it."""
    items.sort(key=lambda kv: kv.v)
    return items


def sort_kv_int_slice_desc(items: list[KVInt]) -> list[KVInt]:
    """Sort ``items`` in place by value descending and return it."""
    items.sort(key=lambda kv: kv.v, reverse=True)
    return items